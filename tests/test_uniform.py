"""Tests for uniform conversion."""

from __future__ import annotations

import numpy as np
import pytest

from mrgstream.core.engines import Mrg3s, Mrg5s, Yarn3s
from mrgstream.core.uniform import (
    produce_uniform,
    raw_array,
    uniform_array,
    uniformcc,
    uniformco,
    uniformoc,
    uniformoo,
)

M = Mrg3s.modulus


def _engine_emitting_zero() -> Mrg3s:
    return Mrg3s([0, 0, 0], seed=[4, 5, 6])


def _engine_emitting_max() -> Mrg3s:
    """x[n] = x[n-1] from r1 = m - 1 repeats the largest output."""
    return Mrg3s([1, 0, 0], seed=[M - 1, 1, 1])


class TestIntervals:
    def test_zero_output(self) -> None:
        assert uniformco(_engine_emitting_zero()) == 0.0
        assert uniformcc(_engine_emitting_zero()) == 0.0
        assert uniformoc(_engine_emitting_zero()) == 1 / M
        assert uniformoo(_engine_emitting_zero()) == 1 / (M + 1)

    def test_max_output(self) -> None:
        assert uniformco(_engine_emitting_max()) == (M - 1) / M
        assert uniformcc(_engine_emitting_max()) == 1.0
        assert uniformoc(_engine_emitting_max()) == 1.0
        assert uniformoo(_engine_emitting_max()) == M / (M + 1)

    def test_half_open_never_reaches_one(self) -> None:
        assert uniformco(_engine_emitting_max()) < 1.0

    def test_open_interval_excludes_both_ends(self) -> None:
        assert 0.0 < uniformoo(_engine_emitting_zero())
        assert uniformoo(_engine_emitting_max()) < 1.0

    def test_first_value_of_reference_stream(self, mrg3s: Mrg3s) -> None:
        assert uniformco(mrg3s) == 882212105 / M

    def test_each_call_advances_engine(self, mrg3s: Mrg3s) -> None:
        first = uniformco(mrg3s)
        second = uniformco(mrg3s)
        assert first != second


class TestProduceUniform:
    @pytest.mark.parametrize("interval", ["co", "cc", "oc", "oo"])
    def test_matches_converter(self, interval: str) -> None:
        converters = {"co": uniformco, "cc": uniformcc, "oc": uniformoc, "oo": uniformoo}
        a = Mrg5s(seed=3)
        b = Mrg5s(seed=3)
        assert produce_uniform(a, interval) == converters[interval](b)  # type: ignore[arg-type]

    def test_default_is_half_open(self, mrg3s: Mrg3s) -> None:
        other = mrg3s.copy()
        assert produce_uniform(mrg3s) == uniformco(other)

    def test_unknown_interval(self, mrg3s: Mrg3s) -> None:
        before = mrg3s.copy()
        with pytest.raises(ValueError, match="unknown interval"):
            produce_uniform(mrg3s, "xx")  # type: ignore[arg-type]
        assert mrg3s == before

    def test_yarn_values_in_range(self) -> None:
        g = Yarn3s(seed=1)
        for _ in range(200):
            assert 0.0 <= produce_uniform(g, "co") < 1.0


class TestArrays:
    def test_uniform_array_matches_scalar_draws(self, mrg3s: Mrg3s) -> None:
        other = mrg3s.copy()
        values = uniform_array(mrg3s, 50, "oc")
        assert values.dtype == np.float64
        assert values.shape == (50,)
        np.testing.assert_array_equal(values, [uniformoc(other) for _ in range(50)])

    def test_uniform_array_range(self, mrg5s: Mrg5s) -> None:
        values = uniform_array(mrg5s, 5000)
        assert values.min() >= 0.0
        assert values.max() < 1.0
        assert abs(values.mean() - 0.5) < 0.02

    def test_uniform_array_unknown_interval(self, mrg3s: Mrg3s) -> None:
        with pytest.raises(ValueError):
            uniform_array(mrg3s, 3, "closed")  # type: ignore[arg-type]

    def test_raw_array(self, mrg3s: Mrg3s) -> None:
        values = raw_array(mrg3s, 3)
        assert values.dtype == np.int64
        assert values.tolist() == [882212105, 750255944, 1510567612]

    def test_empty(self, mrg3s: Mrg3s) -> None:
        assert uniform_array(mrg3s, 0).size == 0
        assert raw_array(mrg3s, 0).size == 0

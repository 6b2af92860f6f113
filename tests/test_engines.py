"""Tests for the concrete engines, the yarn variants and the registry."""

from __future__ import annotations

import pytest

from mrgstream.config.defaults import YARN3S_GENERATOR
from mrgstream.core.engine import GeneratorState, MRGEngine, ParameterSet
from mrgstream.core.engines import (
    ENGINES,
    Mrg3s,
    Mrg5s,
    Yarn3s,
    Yarn5s,
    custom_engine,
    engine_class,
    engine_for_order,
)

YARN3S_SEED1_OUTPUTS = [1195786782, 1512172727, 219478070, 2099781792, 1501023321]
YARN5S_SEED1_OUTPUTS = [1582032245, 488441368, 461838095, 428276541, 625332518]


class TestYarn:
    def test_yarn3s_reference(self) -> None:
        g = Yarn3s(seed=1)
        assert [g() for _ in range(5)] == YARN3S_SEED1_OUTPUTS

    def test_yarn5s_reference(self) -> None:
        g = Yarn5s(seed=1)
        assert [g() for _ in range(5)] == YARN5S_SEED1_OUTPUTS

    def test_output_is_exponentiated_recurrence(self) -> None:
        yarn = Yarn3s(seed=1)
        mrg = Mrg3s(seed=1)
        for _ in range(10):
            assert yarn() == pow(YARN3S_GENERATOR, mrg(), Mrg3s.modulus)

    def test_step_returns_raw_recurrence_value(self) -> None:
        yarn = Yarn3s(seed=1)
        mrg = Mrg3s(seed=1)
        assert [yarn.step() for _ in range(5)] == [mrg.step() for _ in range(5)]

    def test_zero_state_outputs_zero(self) -> None:
        g = Yarn3s([0, 0, 0], seed=[4, 5, 6])
        assert g() == 0

    def test_shares_recurrence_constants(self) -> None:
        assert Yarn3s.modulus == Mrg3s.modulus
        assert Yarn5s.trng1 == Mrg5s.trng1
        assert Yarn5s.max == Mrg5s.max

    def test_split_interleaves(self) -> None:
        base = Yarn5s(seed=1)
        reference = base.copy()
        expected = [reference() for _ in range(6)]
        streams = []
        for index in range(3):
            stream = base.copy()
            stream.split(3, index)
            streams.append(stream)
        assert [s() for _ in range(2) for s in streams] == expected

    def test_text_form_uses_yarn_name(self) -> None:
        assert str(Yarn3s(seed=1)).startswith("[yarn3s (")

    def test_not_equal_to_plain_engine(self) -> None:
        assert Yarn3s(seed=1) != Mrg3s(seed=1)


class TestRegistry:
    def test_all_engines_registered(self) -> None:
        assert set(ENGINES) == {"mrg3s", "mrg5s", "yarn3s", "yarn5s"}

    @pytest.mark.parametrize("name, cls", [("mrg3s", Mrg3s), ("yarn5s", Yarn5s)])
    def test_engine_class(self, name: str, cls: type[MRGEngine]) -> None:
        assert engine_class(name) is cls

    def test_unknown_engine(self) -> None:
        with pytest.raises(KeyError, match="mrg7s"):
            engine_class("mrg7s")

    def test_engine_for_order(self) -> None:
        assert engine_for_order(3) is Mrg3s
        assert engine_for_order(5) is Mrg5s

    def test_engine_for_unknown_order(self) -> None:
        with pytest.raises(KeyError):
            engine_for_order(4)


class TestCustomEngine:
    def test_class_attributes(self) -> None:
        tiny = custom_engine("tiny", 101, [3, 5])
        assert tiny.name == "tiny"
        assert tiny.order == 2
        assert tiny.max == 100
        assert tiny.trng1 == tiny.trng0 == ParameterSet((3, 5))

    def test_recurrence(self) -> None:
        tiny = custom_engine("tiny", 101, [3, 5])
        g = tiny(seed=[1, 2])
        # 3*1 + 5*2 = 13, then 3*13 + 5*1 = 44, then 3*44 + 5*13 = 197 = 96 mod 101
        assert [g() for _ in range(3)] == [13, 44, 96]

    def test_backward(self) -> None:
        tiny = custom_engine("tiny", 101, [3, 5])
        g = tiny(seed=[1, 2])
        for _ in range(10):
            g.step()
        before = g.state
        g.step()
        g.backward()
        assert g.state == before

    def test_alternate_parameters(self) -> None:
        tiny = custom_engine("tiny", 101, [3, 5], alternate=[7, 11])
        assert tiny.trng1 == ParameterSet((7, 11))
        assert tiny(tiny.trng1).parameters == ParameterSet((7, 11))

    def test_default_state(self) -> None:
        g = custom_engine("quad", 2147462579, [1, 2, 3, 4])()
        assert g.state == GeneratorState((0, 1, 1, 1))

    def test_split(self) -> None:
        big = custom_engine("big", Mrg3s.modulus, Mrg3s.trng1)
        base = big(seed=1)
        reference = base.copy()
        expected = [reference() for _ in range(8)][1::2]
        base.split(2, 1)
        assert [base() for _ in range(4)] == expected

    @pytest.mark.parametrize("modulus", [2**61 - 1, 2**31 + 11, 1, 0])
    def test_modulus_out_of_kernel_range(self, modulus: int) -> None:
        """Moduli whose squares overflow int64 would make jump disagree with step."""
        with pytest.raises(ValueError, match="modulus"):
            custom_engine("big", modulus, [3, 5, 7])

    def test_subclass_modulus_out_of_range(self) -> None:
        with pytest.raises(TypeError, match="modulus"):

            class Huge(MRGEngine):
                name = "huge"
                order = 3
                modulus = 2**61 - 1
                trng0 = ParameterSet((3, 5, 7))
                trng1 = ParameterSet((3, 5, 7))

    def test_jump_matches_stepping_at_largest_modulus(self) -> None:
        edge = custom_engine("edge", 2**31 - 1, [2**31 - 2, 2**31 - 3, 2**31 - 4])
        g = edge(seed=[2**31 - 2, 2**31 - 2, 2**31 - 2])
        stepped = g.copy()
        for _ in range(100):
            stepped.step()
        g.jump(100)
        assert g == stepped

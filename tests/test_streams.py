"""Tests for stream spawning and per-stream execution."""

from __future__ import annotations

import pytest

from mrgstream.core.engines import Mrg3s, Mrg5s
from mrgstream.core.streams import interleave, run_streams, spawn_streams
from mrgstream.core.uniform import uniformco
from mrgstream.utils.exceptions import InvalidSplitError


class TestSpawnStreams:
    def test_base_unchanged(self, mrg3s: Mrg3s) -> None:
        before = mrg3s.copy()
        spawn_streams(mrg3s, 4)
        assert mrg3s == before

    def test_count(self, mrg5s: Mrg5s) -> None:
        assert len(spawn_streams(mrg5s, 6)) == 6

    def test_interleave_reproduces_base(self, mrg5s: Mrg5s) -> None:
        streams = spawn_streams(mrg5s, 4)
        expected = [mrg5s() for _ in range(40)]
        assert interleave(streams, 10) == expected

    def test_streams_are_independent_objects(self, mrg3s: Mrg3s) -> None:
        first, second = spawn_streams(mrg3s, 2)
        first_state = second.state
        first()
        assert second.state == first_state

    @pytest.mark.parametrize("total", [0, -3])
    def test_invalid_count(self, mrg3s: Mrg3s, total: int) -> None:
        with pytest.raises(InvalidSplitError, match="total_streams"):
            spawn_streams(mrg3s, total)


class TestRunStreams:
    def test_sequential(self, mrg3s: Mrg3s) -> None:
        results = run_streams(mrg3s, 3, uniformco, max_workers=1)
        first_three = [882212105, 750255944, 1510567612]
        assert results == [v / Mrg3s.modulus for v in first_three]

    def test_process_pool_matches_sequential(self, mrg5s: Mrg5s) -> None:
        sequential = run_streams(mrg5s, 4, uniformco, max_workers=1)
        parallel = run_streams(mrg5s, 4, uniformco, max_workers=2)
        assert parallel == sequential

    @pytest.mark.parametrize("max_workers", [1, 2])
    def test_invalid_count(self, mrg3s: Mrg3s, max_workers: int) -> None:
        """No streams is an invalid partition, not an empty result."""
        with pytest.raises(InvalidSplitError):
            run_streams(mrg3s, 0, uniformco, max_workers=max_workers)

    def test_base_unchanged(self, mrg3s: Mrg3s) -> None:
        before = mrg3s.copy()
        run_streams(mrg3s, 2, uniformco, max_workers=1)
        assert mrg3s == before

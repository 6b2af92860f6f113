"""Shared test fixtures."""

from __future__ import annotations

import pytest
from numpy.random import PCG64DXSM, Generator

from mrgstream.core.engines import Mrg3s, Mrg5s


@pytest.fixture
def np_rng() -> Generator:
    """Deterministic numpy RNG for building test matrices."""
    return Generator(PCG64DXSM(42))


@pytest.fixture
def mrg3s() -> Mrg3s:
    """mrg3s with trng0 parameters, seeded with 1."""
    return Mrg3s(seed=1)


@pytest.fixture
def mrg5s() -> Mrg5s:
    """mrg5s with trng0 parameters, seeded with 1."""
    return Mrg5s(seed=1)

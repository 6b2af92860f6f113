"""Conversion of raw engine output to uniform floating-point values.

This is the narrow interface distributions consume. The interval policy
belongs to the caller; the engine only supplies integers in ``[min, max]``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Literal

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from mrgstream.core.engine import MRGEngine

Interval = Literal["co", "cc", "oc", "oo"]


def uniformco(engine: MRGEngine) -> float:
    """Uniform value in the half-open interval ``[0, 1)``."""
    return (engine() - engine.min) / (engine.max - engine.min + 1)


def uniformcc(engine: MRGEngine) -> float:
    """Uniform value in the closed interval ``[0, 1]``."""
    return (engine() - engine.min) / (engine.max - engine.min)


def uniformoc(engine: MRGEngine) -> float:
    """Uniform value in the half-open interval ``(0, 1]``."""
    return (engine() - engine.min + 1) / (engine.max - engine.min + 1)


def uniformoo(engine: MRGEngine) -> float:
    """Uniform value in the open interval ``(0, 1)``."""
    return (engine() - engine.min + 1) / (engine.max - engine.min + 2)


_CONVERTERS: dict[str, Callable[[MRGEngine], float]] = {
    "co": uniformco,
    "cc": uniformcc,
    "oc": uniformoc,
    "oo": uniformoo,
}


def produce_uniform(engine: MRGEngine, interval: Interval = "co") -> float:
    """Draw the next uniform value from ``engine``.

    Args:
        engine: Generator to advance by one step.
        interval: ``"co"`` for [0, 1), ``"cc"`` for [0, 1], ``"oc"`` for
            (0, 1], ``"oo"`` for (0, 1).

    Raises:
        ValueError: If ``interval`` is not one of the four policies.
    """
    try:
        converter = _CONVERTERS[interval]
    except KeyError:
        raise ValueError(
            f"unknown interval {interval!r}, expected one of {sorted(_CONVERTERS)}"
        ) from None
    return converter(engine)


def uniform_array(
    engine: MRGEngine, size: int, interval: Interval = "co"
) -> NDArray[np.floating[Any]]:
    """Fill a float64 array with ``size`` consecutive uniform draws."""
    if interval not in _CONVERTERS:
        raise ValueError(f"unknown interval {interval!r}, expected one of {sorted(_CONVERTERS)}")
    converter = _CONVERTERS[interval]
    out = np.empty(size, dtype=np.float64)
    for i in range(size):
        out[i] = converter(engine)
    return out


def raw_array(engine: MRGEngine, size: int) -> NDArray[np.int64]:
    """Fill an int64 array with ``size`` consecutive raw outputs."""
    out = np.empty(size, dtype=np.int64)
    for i in range(size):
        out[i] = engine()
    return out

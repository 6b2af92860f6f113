"""Quality metrics for uniform samples drawn from generator streams."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from itertools import combinations

import numpy as np
from numpy.typing import ArrayLike


@dataclass(frozen=True)
class StreamMetrics:
    """Summary statistics of one stream's uniform [0, 1) samples."""

    n_samples: int
    mean: float
    variance: float
    chi_square: float
    n_bins: int
    lag1_autocorrelation: float


def compute_stream_metrics(samples: ArrayLike, bins: int = 10) -> StreamMetrics:
    """Compute uniformity and serial-correlation statistics.

    For ideal [0, 1) uniforms the mean is 1/2, the variance 1/12, the
    chi-square statistic has ``bins - 1`` degrees of freedom and the lag-1
    autocorrelation is close to 0.

    Args:
        samples: (n,) array of values in [0, 1).
        bins: Number of equal-width bins for the chi-square statistic.

    Returns:
        StreamMetrics for the sample.
    """
    values = np.asarray(samples, dtype=np.float64)
    if values.ndim != 1 or values.size < 2:
        raise ValueError("need a one-dimensional sample of at least 2 values")
    if bins < 2:
        raise ValueError("bins must be at least 2")

    n = values.size
    counts, _ = np.histogram(values, bins=bins, range=(0.0, 1.0))
    expected = n / bins
    chi_square = float(((counts - expected) ** 2 / expected).sum())

    centered = values - values.mean()
    denom = float((centered**2).sum())
    lag1 = float((centered[:-1] * centered[1:]).sum() / denom) if denom > 0 else 0.0

    return StreamMetrics(
        n_samples=n,
        mean=float(values.mean()),
        variance=float(values.var()),
        chi_square=chi_square,
        n_bins=bins,
        lag1_autocorrelation=lag1,
    )


def cross_correlation(samples_by_stream: Mapping[str, ArrayLike]) -> float:
    """Largest absolute Pearson correlation between any two streams.

    Streams are truncated to the shortest length. Returns 0.0 for fewer than
    two streams.
    """
    arrays = [np.asarray(v, dtype=np.float64) for v in samples_by_stream.values()]
    if len(arrays) < 2:
        return 0.0
    n = min(a.size for a in arrays)
    if n < 2:
        raise ValueError("each stream needs at least 2 samples")

    worst = 0.0
    for x, y in combinations(arrays, 2):
        corr = np.corrcoef(x[:n], y[:n])[0, 1]
        worst = max(worst, abs(float(corr)))
    return worst

"""Chart components for the Streamlit app."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import numpy as np
import plotly.graph_objects as go
from numpy.typing import NDArray

from app.components.theme import (
    MARKER_OPACITY,
    SAMPLE_COLOR,
    add_expected_density_hline,
    stream_color,
)


def histogram_chart(samples: NDArray[np.floating[Any]], bins: int = 20) -> go.Figure:
    """Normalized histogram of [0, 1) samples against the uniform density."""
    fig = go.Figure()
    fig.add_trace(
        go.Histogram(
            x=samples,
            xbins=dict(start=0.0, end=1.0, size=1.0 / bins),
            histnorm="probability density",
            marker_color=SAMPLE_COLOR,
            name="Samples",
        )
    )
    add_expected_density_hline(fig, 1.0)
    fig.update_layout(
        title="Sample Distribution",
        xaxis_title="Value",
        yaxis_title="Density",
        bargap=0.02,
    )
    return fig


def lag_scatter(samples: NDArray[np.floating[Any]], lag: int = 1) -> go.Figure:
    """Scatter of ``x[n]`` against ``x[n + lag]``; structure shows up as patterns."""
    if lag < 1 or lag >= len(samples):
        raise ValueError(f"lag must be in [1, {len(samples) - 1}], got {lag}")
    fig = go.Figure()
    fig.add_trace(
        go.Scattergl(
            x=samples[:-lag],
            y=samples[lag:],
            mode="markers",
            marker=dict(size=3, color=SAMPLE_COLOR, opacity=MARKER_OPACITY),
            name=f"Lag {lag}",
        )
    )
    fig.update_layout(
        title=f"Lag-{lag} Scatter",
        xaxis_title="x[n]",
        yaxis_title=f"x[n+{lag}]",
        xaxis_range=[0, 1],
        yaxis_range=[0, 1],
    )
    return fig


def stream_overlay_chart(samples_by_stream: Mapping[str, NDArray[np.floating[Any]]]) -> go.Figure:
    """Running mean of each stream, which should settle near 0.5."""
    fig = go.Figure()
    for i, (label, samples) in enumerate(samples_by_stream.items()):
        running_mean = np.cumsum(samples) / np.arange(1, len(samples) + 1)
        fig.add_trace(
            go.Scatter(
                x=np.arange(1, len(samples) + 1),
                y=running_mean,
                mode="lines",
                line=dict(color=stream_color(i), width=1.5),
                name=label,
            )
        )
    fig.add_hline(y=0.5, line_dash="dot", line_color="#BDBDBD", line_width=1)
    fig.update_layout(
        title="Running Mean by Stream",
        xaxis_title="Samples drawn",
        yaxis_title="Mean",
    )
    return fig

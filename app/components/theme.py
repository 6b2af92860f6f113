"""Custom Plotly theme for mrgstream charts."""

from __future__ import annotations

import plotly.graph_objects as go
import plotly.io as pio

# --- Colorblind-friendly palette (IBM/Wong-inspired) ---
SAMPLE_COLOR = "#4363D8"
REFERENCE_COLOR = "#E6194B"

COLOR_SEQUENCE = [
    "#4363D8",  # blue
    "#E6194B",  # red
    "#3CB44B",  # green
    "#F58231",  # orange
    "#911EB4",  # purple
    "#42D4F4",  # cyan
    "#F032E6",  # magenta
    "#BFEF45",  # lime
]

MARKER_OPACITY = 0.35

# Font stack
_FONT_FAMILY = "Inter, -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif"


def stream_color(index: int) -> str:
    """Color for stream ``index``, cycling through the palette."""
    return COLOR_SEQUENCE[index % len(COLOR_SEQUENCE)]


def add_expected_density_hline(fig: go.Figure, density: float) -> None:
    """Add the flat reference line of an ideal uniform histogram."""
    fig.add_hline(
        y=density,
        line_dash="dash",
        line_color=REFERENCE_COLOR,
        line_width=1.5,
        annotation_text="Uniform",
        annotation_font_size=11,
        annotation_font_color="#757575",
    )


def register_theme() -> None:
    """Register and activate the mrgstream Plotly template."""
    mrgstream_layout = go.Layout(
        font=dict(family=_FONT_FAMILY, size=13),
        title_font=dict(size=16),
        colorway=COLOR_SEQUENCE,
        plot_bgcolor="white",
        paper_bgcolor="white",
        xaxis=dict(
            gridcolor="#E5E5E5",
            zerolinecolor="#BDBDBD",
            zerolinewidth=1,
        ),
        yaxis=dict(
            gridcolor="#E5E5E5",
            zerolinecolor="#BDBDBD",
            zerolinewidth=1,
        ),
        legend=dict(
            orientation="h",
            yanchor="bottom",
            y=1.02,
            xanchor="left",
            x=0,
        ),
        margin=dict(l=60, r=20, t=60, b=40),
    )

    pio.templates["mrgstream"] = go.layout.Template(layout=mrgstream_layout)
    pio.templates.default = "mrgstream"

"""mrgstream: Stream Explorer."""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the repo root is on sys.path so `from app.components...` imports work
# when running `streamlit run app/Home.py`.
_root = str(Path(__file__).resolve().parent.parent)
if _root not in sys.path:
    sys.path.insert(0, _root)

import streamlit as st

st.set_page_config(
    page_title="mrgstream",
    page_icon="🎲",
    layout="wide",
    initial_sidebar_state="expanded",
)

from app.components.charts import histogram_chart, lag_scatter, stream_overlay_chart
from app.components.theme import register_theme
from mrgstream.analytics.metrics import compute_stream_metrics, cross_correlation
from mrgstream.config.schema import GeneratorConfig
from mrgstream.core.rng import make_rng
from mrgstream.core.streams import spawn_streams
from mrgstream.core.uniform import uniform_array

register_theme()

st.title("mrgstream")
st.subheader("Stream Explorer")

st.markdown(
    """
    Split a multiple recursive generator into disjoint streams and inspect
    the uniform samples each stream produces.
    """
)

with st.sidebar:
    engine = st.selectbox("Engine", ["mrg3s", "mrg5s", "yarn3s", "yarn5s"])
    parameters = st.selectbox("Parameters", ["trng0", "trng1"])
    seed = int(st.number_input("Seed", min_value=0, value=1, step=1))
    total_streams = int(st.number_input("Streams", min_value=1, max_value=16, value=4, step=1))
    n_samples = int(
        st.number_input("Samples per stream", min_value=10, max_value=50_000, value=2_000, step=500)
    )

base = make_rng(GeneratorConfig(engine=engine, parameters=parameters, seed=seed))
streams = spawn_streams(base, total_streams)
samples = {f"Stream {i}": uniform_array(s, n_samples) for i, s in enumerate(streams)}

col1, col2 = st.columns(2)
first_label = next(iter(samples))
with col1:
    st.plotly_chart(histogram_chart(samples[first_label]), use_container_width=True)
with col2:
    st.plotly_chart(lag_scatter(samples[first_label]), use_container_width=True)

st.plotly_chart(stream_overlay_chart(samples), use_container_width=True)

st.subheader("Stream Metrics")
rows = []
for label, values in samples.items():
    metrics = compute_stream_metrics(values)
    rows.append(
        {
            "Stream": label,
            "Mean": round(metrics.mean, 4),
            "Variance": round(metrics.variance, 4),
            f"Chi-square ({metrics.n_bins - 1} dof)": round(metrics.chi_square, 2),
            "Lag-1 autocorrelation": round(metrics.lag1_autocorrelation, 4),
        }
    )
st.dataframe(rows, use_container_width=True)
st.metric("Max cross-stream correlation", f"{cross_correlation(samples):.4f}")

st.caption(f"Base generator: `{base}`")

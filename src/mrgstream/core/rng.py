"""Deterministic generator factory for reproducible simulations."""

from __future__ import annotations

from mrgstream.config.schema import GeneratorConfig, StreamConfig
from mrgstream.core.engine import MRGEngine
from mrgstream.core.engines import engine_class


def make_rng(config: GeneratorConfig, stream: StreamConfig | None = None) -> MRGEngine:
    """Create a generator from configuration.

    Builds the configured engine with canonical or custom parameters, applies
    the seed, then (if ``stream`` is given) splits it into the requested
    stream and skips ``stream.skip`` outputs.

    Raises:
        SingularSplitError: If the requested split is not solvable for custom
            parameters.
    """
    cls = engine_class(config.engine)
    if isinstance(config.parameters, str):
        parameters = getattr(cls, config.parameters)
    else:
        parameters = config.parameters
    rng = cls(parameters, seed=config.seed)

    if stream is not None:
        rng.split(stream.total_streams, stream.stream_index)
        rng.jump(stream.skip)
    return rng

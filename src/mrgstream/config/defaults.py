"""Default configuration values and canonical constants for mrgstream."""

from __future__ import annotations

from mrgstream.config.schema import (
    GeneratorConfig,
    RunConfig,
    SampleConfig,
    StreamConfig,
)
from mrgstream.core.engine import ParameterSet

# --- Moduli (safe primes just below 2**31) ---

MRG3S_MODULUS = 2147462579  # 2**31 - 21069
MRG5S_MODULUS = 2147461007  # 2**31 - 22641

# Primitive roots used by the YARN output transformation
YARN3S_GENERATOR = 1616076847
YARN5S_GENERATOR = 889744251

# --- Canonical parameter sets (published reference values) ---

MRG3S_TRNG0 = ParameterSet((2025213985, 1112953677, 2038969601))
MRG3S_TRNG1 = ParameterSet((1287767370, 1045931779, 58150106))

MRG5S_TRNG0 = ParameterSet((1053223373, 1530818118, 1612122482, 133497989, 573245311))
MRG5S_TRNG1 = ParameterSet((2068619238, 2138332912, 671754166, 1442240992, 1526958817))

CANONICAL_PARAMETERS: dict[int, dict[str, ParameterSet]] = {
    3: {"trng0": MRG3S_TRNG0, "trng1": MRG3S_TRNG1},
    5: {"trng0": MRG5S_TRNG0, "trng1": MRG5S_TRNG1},
}


def default_generator_config() -> GeneratorConfig:
    """mrg3s with trng0 parameters and the default state."""
    return GeneratorConfig()


def default_stream_config() -> StreamConfig:
    """A single stream covering the whole sequence."""
    return StreamConfig()


def default_sample_config() -> SampleConfig:
    return SampleConfig()


def default_run_config() -> RunConfig:
    return RunConfig(
        generator=default_generator_config(),
        stream=default_stream_config(),
        sample=default_sample_config(),
    )

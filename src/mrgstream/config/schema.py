"""Pydantic v2 configuration models for mrgstream."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

EngineName = Literal["mrg3s", "mrg5s", "yarn3s", "yarn5s"]

ENGINE_ORDERS: dict[str, int] = {
    "mrg3s": 3,
    "mrg5s": 5,
    "yarn3s": 3,
    "yarn5s": 5,
}


class GeneratorConfig(BaseModel):
    """Which engine to build and how to initialize it."""

    model_config = ConfigDict(extra="forbid")

    engine: EngineName = Field(default="mrg3s", description="Engine name")
    parameters: Literal["trng0", "trng1"] | list[int] = Field(
        default="trng0",
        description="Canonical parameter set name or custom coefficients a1..ak",
    )
    seed: int | list[int] | None = Field(
        default=None,
        description="Single seed value, full state window r1..rk, or None for the default state",
    )

    @property
    def order(self) -> int:
        return ENGINE_ORDERS[self.engine]

    @model_validator(mode="after")
    def _validate_lengths(self) -> GeneratorConfig:
        k = self.order
        if isinstance(self.parameters, list) and len(self.parameters) != k:
            raise ValueError(
                f"{self.engine} needs {k} coefficients, got {len(self.parameters)}"
            )
        if isinstance(self.seed, list) and len(self.seed) != k:
            raise ValueError(f"{self.engine} seed window needs {k} values, got {len(self.seed)}")
        return self


class StreamConfig(BaseModel):
    """Stream partition and skip-ahead applied after construction."""

    model_config = ConfigDict(extra="forbid")

    total_streams: int = Field(default=1, ge=1, description="Number of disjoint streams")
    stream_index: int = Field(default=0, ge=0, description="Stream to select (0-based)")
    skip: int = Field(default=0, ge=0, description="Outputs to skip after splitting")

    @model_validator(mode="after")
    def _validate_index(self) -> StreamConfig:
        if self.stream_index >= self.total_streams:
            raise ValueError(
                f"stream_index ({self.stream_index}) must be less than "
                f"total_streams ({self.total_streams})"
            )
        return self


class SampleConfig(BaseModel):
    """How many values to draw and in which form."""

    model_config = ConfigDict(extra="forbid")

    n_samples: int = Field(default=10, ge=1, le=10_000_000)
    output: Literal["raw", "co", "cc", "oc", "oo"] = Field(
        default="raw",
        description="Raw integers or uniform floats on the given interval",
    )


class RunConfig(BaseModel):
    """Bundle of all configuration for one sampling run."""

    model_config = ConfigDict(extra="forbid")

    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)
    stream: StreamConfig = Field(default_factory=StreamConfig)
    sample: SampleConfig = Field(default_factory=SampleConfig)

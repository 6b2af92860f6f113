"""Serialization of generators, run configs, and sample output.

The canonical text form of a generator is::

    [mrg3s (a1 a2 a3) (r1 r2 r3)]

i.e. the engine name, the parameter set and the state window. Parsing the
text form yields a generator equal to the one that produced it, which is what
checkpoint/restart of long simulations relies on.
"""

from __future__ import annotations

import csv
import hashlib
import io
import json
import re
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from mrgstream import __version__
from mrgstream.config.schema import RunConfig
from mrgstream.core.engine import GeneratorState, MRGEngine, ParameterSet
from mrgstream.core.engines import ENGINES
from mrgstream.utils.exceptions import ParseError

_TUPLE_RE = r"\(\s*(-?\d+(?:\s+-?\d+)*)\s*\)"
_ENGINE_RE = re.compile(r"^\s*\[\s*(\w+)\s+" + _TUPLE_RE + r"\s+" + _TUPLE_RE + r"\s*\]\s*$")
_SINGLE_TUPLE_RE = re.compile(r"^\s*" + _TUPLE_RE + r"\s*$")


def format_parameters(parameters: ParameterSet) -> str:
    """Text form ``(a1 a2 ... ak)``."""
    return str(parameters)


def format_state(state: GeneratorState) -> str:
    """Text form ``(r1 r2 ... rk)``."""
    return str(state)


def _parse_tuple(text: str) -> tuple[int, ...]:
    match = _SINGLE_TUPLE_RE.match(text)
    if match is None:
        raise ParseError(f"expected '(v1 v2 ...)', got {text!r}")
    return tuple(int(v) for v in match.group(1).split())


def parse_parameters(text: str) -> ParameterSet:
    """Parse ``(a1 a2 ... ak)`` into a :class:`ParameterSet`."""
    return ParameterSet(_parse_tuple(text))


def parse_state(text: str) -> GeneratorState:
    """Parse ``(r1 r2 ... rk)`` into a :class:`GeneratorState`."""
    return GeneratorState(_parse_tuple(text))


def dump_engine(engine: MRGEngine) -> str:
    """Text form ``[name (a1 ... ak) (r1 ... rk)]``."""
    return str(engine)


def parse_engine(text: str) -> MRGEngine:
    """Rebuild a generator from its text form.

    Raises:
        ParseError: If the text is malformed, names an unknown engine, or
            has the wrong number of coefficients or state values.
    """
    match = _ENGINE_RE.match(text)
    if match is None:
        raise ParseError(f"malformed generator text: {text!r}")
    name, params_text, state_text = match.groups()
    cls = ENGINES.get(name)
    if cls is None:
        raise ParseError(f"unknown engine {name!r} in {text!r}")
    coefficients = [int(v) for v in params_text.split()]
    state = [int(v) for v in state_text.split()]
    if len(coefficients) != cls.order or len(state) != cls.order:
        raise ParseError(
            f"{name} expects {cls.order} coefficients and {cls.order} state values, "
            f"got {len(coefficients)} and {len(state)}"
        )
    return cls(coefficients, seed=state)


class Checkpoint(BaseModel):
    """JSON checkpoint of one generator."""

    model_config = ConfigDict(extra="forbid")

    engine: str
    parameters: list[int] = Field(min_length=1)
    state: list[int] = Field(min_length=1)
    version: str = Field(default=__version__, description="mrgstream version that wrote it")


def dump_checkpoint(engine: MRGEngine) -> str:
    """Serialize a generator to a JSON checkpoint string."""
    checkpoint = Checkpoint(
        engine=engine.name,
        parameters=list(engine.parameters),
        state=list(engine.state),
    )
    return checkpoint.model_dump_json(indent=2)


def load_checkpoint(json_str: str) -> MRGEngine:
    """Restore a generator from :func:`dump_checkpoint` output.

    Raises:
        ParseError: If the JSON is invalid or does not describe a known engine.
    """
    try:
        checkpoint = Checkpoint.model_validate_json(json_str)
    except ValidationError as exc:
        raise ParseError(f"invalid checkpoint: {exc}") from exc
    cls = ENGINES.get(checkpoint.engine)
    if cls is None:
        raise ParseError(f"unknown engine {checkpoint.engine!r} in checkpoint")
    if len(checkpoint.parameters) != cls.order or len(checkpoint.state) != cls.order:
        raise ParseError(f"checkpoint does not match the order of {checkpoint.engine}")
    return cls(checkpoint.parameters, seed=checkpoint.state)


def compute_config_hash(config: RunConfig) -> str:
    """Compute a deterministic SHA-256 hash of a run config.

    Uses canonical JSON (sorted keys, no whitespace) so the same
    logical config always produces the same hash.
    """
    canonical = json.dumps(config.model_dump(), sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode()).hexdigest()


def dump_config(config: RunConfig) -> str:
    """Serialize a run config to a JSON string."""
    return json.dumps(config.model_dump(), indent=2)


def load_config(json_str: str) -> RunConfig:
    """Deserialize a run config from a JSON string."""
    data: dict[str, Any] = json.loads(json_str)
    return RunConfig.model_validate(data)


def dump_samples_csv(samples_by_stream: dict[str, Sequence[float]]) -> str:
    """Export samples as CSV, one column per stream.

    Args:
        samples_by_stream: Column label to sample sequence. Shorter columns
            are padded with empty cells.

    Returns:
        CSV string with an ``Index`` column followed by one column per stream.
    """
    if not samples_by_stream:
        return ""

    labels = list(samples_by_stream)
    n_rows = max(len(values) for values in samples_by_stream.values())
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(["Index", *labels])
    for i in range(n_rows):
        row: list[Any] = [i]
        for label in labels:
            values = samples_by_stream[label]
            row.append(values[i] if i < len(values) else "")
        writer.writerow(row)
    return output.getvalue()

"""CLI entry point for mrgstream."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError

from mrgstream.config.defaults import default_run_config
from mrgstream.config.schema import RunConfig
from mrgstream.core.engines import ENGINES
from mrgstream.core.rng import make_rng
from mrgstream.core.uniform import produce_uniform
from mrgstream.io.serialize import dump_samples_csv, parse_engine
from mrgstream.io.yaml_loader import load_run_config
from mrgstream.utils.exceptions import MrgStreamError

_ENGINE_CHOICE = click.Choice(sorted(ENGINES))
_PARAMETER_CHOICE = click.Choice(["trng0", "trng1"])


def _build_config(config_path: Path | None, overrides: dict[str, dict[str, Any]]) -> RunConfig:
    base = load_run_config(config_path) if config_path is not None else default_run_config()
    data = base.model_dump()
    for section, values in overrides.items():
        data[section].update({k: v for k, v in values.items() if v is not None})
    return RunConfig.model_validate(data)


@click.group()
@click.version_option(package_name="mrgstream")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """mrgstream: splittable multiple recursive random number generators."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


@cli.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to a YAML or JSON run config. Uses defaults if not provided.",
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to write samples as CSV.",
)
@click.option("--engine", type=_ENGINE_CHOICE, default=None, help="Generator engine.")
@click.option("--parameters", type=_PARAMETER_CHOICE, default=None, help="Canonical parameters.")
@click.option("--seed", type=int, default=None, help="Seed value.")
@click.option("--streams", "total_streams", type=int, default=None, help="Number of streams.")
@click.option("--index", "stream_index", type=int, default=None, help="Stream index (0-based).")
@click.option("--skip", type=int, default=None, help="Outputs to skip after splitting.")
@click.option("--count", "n_samples", type=int, default=None, help="Number of values to draw.")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["raw", "co", "cc", "oc", "oo"]),
    default=None,
    help="Raw integers or uniform floats on the given interval.",
)
def sample(
    config_path: Path | None,
    output_path: Path | None,
    engine: str | None,
    parameters: str | None,
    seed: int | None,
    total_streams: int | None,
    stream_index: int | None,
    skip: int | None,
    n_samples: int | None,
    output_format: str | None,
) -> None:
    """Draw values from one stream of a generator."""
    try:
        config = _build_config(
            config_path,
            {
                "generator": {"engine": engine, "parameters": parameters, "seed": seed},
                "stream": {
                    "total_streams": total_streams,
                    "stream_index": stream_index,
                    "skip": skip,
                },
                "sample": {"n_samples": n_samples, "output": output_format},
            },
        )
        rng = make_rng(config.generator, config.stream)
    except (ValidationError, MrgStreamError) as exc:
        raise click.ClickException(str(exc)) from exc

    stream = config.stream
    click.echo(
        f"Engine: {rng.name}, stream {stream.stream_index} of {stream.total_streams}, "
        f"{config.sample.n_samples} values"
    )
    values: list[float] = []
    for _ in range(config.sample.n_samples):
        if config.sample.output == "raw":
            values.append(rng())
        else:
            values.append(produce_uniform(rng, config.sample.output))
    for value in values:
        click.echo(value)

    if output_path is not None:
        output_path.write_text(dump_samples_csv({f"stream_{stream.stream_index}": values}))
        click.echo(f"\nSamples written to {output_path}")


@cli.command()
@click.option("--engine", type=_ENGINE_CHOICE, default="mrg3s", help="Generator engine.")
@click.option("--parameters", type=_PARAMETER_CHOICE, default="trng0", help="Canonical parameters.")
@click.option("--seed", type=int, default=None, help="Seed value.")
@click.option("--streams", "total_streams", type=int, required=True, help="Number of streams.")
def split(engine: str, parameters: str, seed: int | None, total_streams: int) -> None:
    """Print the text form of every stream of a base generator."""
    try:
        config = _build_config(
            None, {"generator": {"engine": engine, "parameters": parameters, "seed": seed}}
        )
        base = make_rng(config.generator)
        if total_streams < 1:
            raise click.BadParameter("must be at least 1", param_hint="--streams")
        for index in range(total_streams):
            stream = base.copy()
            stream.split(total_streams, index)
            click.echo(f"{index}: {stream}")
    except (ValidationError, MrgStreamError) as exc:
        raise click.ClickException(str(exc)) from exc


@cli.command()
@click.option(
    "--state",
    "state_text",
    required=True,
    help="Generator in text form, e.g. '[mrg3s (a1 a2 a3) (r1 r2 r3)]'.",
)
@click.option("--steps", type=click.IntRange(min=0), required=True, help="Steps to jump ahead.")
def jump(state_text: str, steps: int) -> None:
    """Jump a serialized generator ahead and print its new text form."""
    try:
        rng = parse_engine(state_text)
    except MrgStreamError as exc:
        raise click.ClickException(str(exc)) from exc
    rng.jump(steps)
    click.echo(str(rng))


if __name__ == "__main__":
    cli()

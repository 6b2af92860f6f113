"""Helpers for the one-generator-per-worker usage pattern."""

from __future__ import annotations

import concurrent.futures
import logging
from collections.abc import Callable, Sequence
from typing import TypeVar

from mrgstream.core.engine import MRGEngine
from mrgstream.utils.exceptions import InvalidSplitError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def spawn_streams(base: MRGEngine, total_streams: int) -> list[MRGEngine]:
    """Split copies of ``base`` into ``total_streams`` disjoint streams.

    ``base`` is not modified. Stream ``i`` yields the base sequence's outputs
    ``i, i + total_streams, i + 2 * total_streams, ...``.

    Raises:
        InvalidSplitError: If ``total_streams < 1``.
    """
    if total_streams < 1:
        raise InvalidSplitError(
            f"invalid argument for spawn_streams: total_streams={total_streams}"
        )
    streams = []
    for index in range(total_streams):
        stream = base.copy()
        stream.split(total_streams, index)
        streams.append(stream)
    return streams


def interleave(streams: Sequence[MRGEngine], rounds: int) -> list[int]:
    """Draw round-robin from ``streams`` for ``rounds`` rounds.

    For streams produced by :func:`spawn_streams` this reproduces the first
    ``rounds * len(streams)`` outputs of the base generator.
    """
    values: list[int] = []
    for _ in range(rounds):
        for stream in streams:
            values.append(stream())
    return values


def run_streams(
    base: MRGEngine,
    total_streams: int,
    task: Callable[[MRGEngine], T],
    max_workers: int | None = None,
) -> list[T]:
    """Run ``task`` once per stream, each with its own generator.

    Args:
        base: Generator to split. Not modified.
        total_streams: Number of streams (and task invocations).
        task: Callable receiving a private generator. Must be picklable
            (a module-level function) unless ``max_workers == 1``.
        max_workers: Maximum number of worker processes. ``None`` uses all
            available cores; ``1`` forces sequential execution.

    Returns:
        Task results ordered by stream index.
    """
    streams = spawn_streams(base, total_streams)
    if max_workers == 1:
        return [task(stream) for stream in streams]

    logger.debug("running %d streams in a process pool", total_streams)
    results: list[T | None] = [None] * total_streams
    with concurrent.futures.ProcessPoolExecutor(max_workers=max_workers) as executor:
        future_to_index = {
            executor.submit(task, stream): index for index, stream in enumerate(streams)
        }
        for future in concurrent.futures.as_completed(future_to_index):
            results[future_to_index[future]] = future.result()
    return results  # type: ignore[return-value]

"""Generic multiple recursive generator (MRG) engine.

One implementation serves every recurrence order. Concrete engines
(``mrg3s``, ``mrg5s``, ...) are subclasses that only pin the class constants
``name``, ``order``, ``modulus`` and the canonical parameter sets.

The recurrence is::

    x[n] = (a1 * x[n-1] + a2 * x[n-2] + ... + ak * x[n-k]) mod m

and the state is the window ``(r1, ..., rk)`` of the k most recent values,
most recent first.
"""

from __future__ import annotations

import logging
import numbers
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any, ClassVar

import numpy as np

from mrgstream.core.linalg import MAX_MODULUS, companion_matrix, matpow, matvec, solve
from mrgstream.core.modular import modinv
from mrgstream.core.uniform import uniformco
from mrgstream.utils.exceptions import (
    InvalidSplitError,
    SingularMatrixError,
    SingularSplitError,
    SplitError,
)

logger = logging.getLogger(__name__)

# Below this distance a jump is cheaper as plain steps than as matrix powers.
JUMP_THRESHOLD = 16


def _format_tuple(values: Sequence[int]) -> str:
    return "(" + " ".join(str(v) for v in values) + ")"


@dataclass(frozen=True)
class ParameterSet:
    """Recurrence coefficients ``a1..ak``."""

    coefficients: tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "coefficients", tuple(int(a) for a in self.coefficients))

    @property
    def order(self) -> int:
        return len(self.coefficients)

    def __len__(self) -> int:
        return len(self.coefficients)

    def __iter__(self) -> Iterator[int]:
        return iter(self.coefficients)

    def __getitem__(self, index: int) -> int:
        return self.coefficients[index]

    def __str__(self) -> str:
        return _format_tuple(self.coefficients)


@dataclass(frozen=True)
class GeneratorState:
    """State window ``r1..rk``, most recent value first."""

    values: tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(int(r) for r in self.values))

    @property
    def order(self) -> int:
        return len(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[int]:
        return iter(self.values)

    def __getitem__(self, index: int) -> int:
        return self.values[index]

    def __str__(self) -> str:
        return _format_tuple(self.values)


@dataclass(frozen=True)
class SplitResult:
    """Outcome of :meth:`MRGEngine.try_split`. Truthy on success."""

    ok: bool
    error: SplitError | None = None

    def __bool__(self) -> bool:
        return self.ok


class MRGEngine:
    """Multiple recursive generator of order ``k`` over a prime field.

    Not thread-safe: give each worker its own instance (see
    :func:`mrgstream.core.streams.spawn_streams`).

    Args:
        parameters: Coefficients ``a1..ak``. Defaults to ``trng0``.
        seed: Optional seed, either a single integer (see :meth:`seed`) or a
            sequence of k integers for the full state window.
    """

    name: ClassVar[str]
    order: ClassVar[int]
    modulus: ClassVar[int]
    trng0: ClassVar[ParameterSet]
    trng1: ClassVar[ParameterSet]
    min: ClassVar[int] = 0
    max: ClassVar[int]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "modulus" in cls.__dict__:
            if not 2 <= cls.modulus <= MAX_MODULUS:
                raise TypeError(
                    f"{cls.__name__}.modulus must be in [2, 2**31], got {cls.modulus}"
                )
            cls.max = cls.modulus - 1
        order = cls.__dict__.get("order")
        if order is not None and order < 1:
            raise TypeError(f"{cls.__name__}.order must be at least 1, got {order}")
        for attr in ("trng0", "trng1"):
            params = cls.__dict__.get(attr)
            if params is not None and len(params) != cls.order:
                raise TypeError(
                    f"{cls.__name__}.{attr} has {len(params)} coefficients, expected {cls.order}"
                )

    def __init__(
        self,
        parameters: ParameterSet | Sequence[int] | None = None,
        seed: int | Sequence[int] | None = None,
    ) -> None:
        if not hasattr(type(self), "modulus"):
            raise TypeError(f"{type(self).__name__} is abstract; use a concrete engine class")
        self._a: tuple[int, ...] = self._normalize(
            self.trng0 if parameters is None else parameters, "parameters"
        )
        self._r: list[int] = self._default_state()
        if seed is not None:
            if isinstance(seed, numbers.Integral):
                self.seed(seed)
            else:
                self.seed(*seed)

    # --- construction helpers ---

    def _normalize(self, values: Sequence[int], label: str) -> tuple[int, ...]:
        result = tuple(int(v) % self.modulus for v in values)
        if len(result) != self.order:
            raise ValueError(
                f"{self.name} {label} must have {self.order} values, got {len(result)}"
            )
        return result

    def _default_state(self) -> list[int]:
        return [0] + [1] * (self.order - 1)

    # --- parameters and state ---

    @property
    def parameters(self) -> ParameterSet:
        """Current recurrence coefficients."""
        return ParameterSet(self._a)

    @parameters.setter
    def parameters(self, value: ParameterSet | Sequence[int]) -> None:
        self._a = self._normalize(value, "parameters")

    @property
    def state(self) -> GeneratorState:
        """Snapshot of the current state window."""
        return GeneratorState(tuple(self._r))

    @state.setter
    def state(self, value: GeneratorState | Sequence[int]) -> None:
        self._r = list(self._normalize(value, "state"))

    # --- seeding ---

    def seed(self, *values: int) -> None:
        """Reseed the generator.

        ``seed()`` restores a default-constructed generator (``trng0``
        parameters, state ``(0, 1, ..., 1)``). ``seed(s)`` sets ``r1 = s mod m``
        and every other slot to 1. ``seed(s1, ..., sk)`` sets each slot to
        ``si mod m``.
        """
        if not values:
            self._a = self.trng0.coefficients
            self._r = self._default_state()
        elif len(values) == 1:
            self._r = [int(values[0]) % self.modulus] + [1] * (self.order - 1)
        elif len(values) == self.order:
            self._r = [int(v) % self.modulus for v in values]
        else:
            raise TypeError(
                f"{self.name}.seed() takes 0, 1 or {self.order} values, got {len(values)}"
            )

    # --- stepping ---

    def step(self) -> int:
        """Advance one step and return the new most-recent value ``r1``."""
        r = self._r
        t = sum(a * x for a, x in zip(self._a, r)) % self.modulus
        r.pop()
        r.insert(0, t)
        return t

    def __call__(self) -> int:
        """Advance one step and return the engine output in ``[min, max]``."""
        return self.step()

    def backward(self) -> None:
        """Undo one step.

        Solves the recurrence for the value that preceded the window, using
        the highest-indexed non-zero coefficient ``aj`` (checked from ``ak``
        down to ``a1``). With all coefficients zero the recovered value is 0.
        """
        m = self.modulus
        a = self._a
        r = self._r
        k = self.order
        t = 0
        for j in range(k, 0, -1):
            if a[j - 1] != 0:
                # r[base] = a1*r[base+1] + ... + a(j-1)*r[base+j-1] + aj*t
                base = k - j
                t = r[base]
                for i in range(1, j):
                    t -= a[i - 1] * r[base + i]
                t = (t % m) * modinv(a[j - 1], m) % m
                break
        r.pop(0)
        r.append(t)

    def jump(self, steps: int) -> None:
        """Advance by ``steps`` in O(log steps) matrix operations.

        The result is identical to calling :meth:`step` ``steps`` times.
        Parameters are never modified.
        """
        if steps < 0:
            raise ValueError(f"jump distance must be non-negative, got {steps}")
        if steps < JUMP_THRESHOLD:
            for _ in range(steps):
                self.step()
            return

        logger.debug("%s: jumping %d steps via companion matrix powers", self.name, steps)
        m = self.modulus
        power = matpow(companion_matrix(self._a, m), steps, m)
        window = matvec(power, np.array(self._r, dtype=np.int64), m)
        self._r = [int(v) for v in window]

    def discard(self, n: int) -> None:
        """Skip ``n`` outputs (same as :meth:`jump`)."""
        self.jump(n)

    def randint(self, x: int) -> int:
        """Integer in ``[0, x)`` drawn from one ``[0, 1)`` uniform."""
        return int(uniformco(self) * x)

    # --- splitting ---

    def split(self, total_streams: int, stream_index: int) -> None:
        """Turn this generator into stream ``stream_index`` of ``total_streams``.

        After the split, one step of this generator equals ``total_streams``
        steps of the current sequence, and its first output is the
        current sequence's output number ``stream_index`` (0-based).

        Raises:
            InvalidSplitError: If ``total_streams < 1`` or ``stream_index`` is
                outside ``[0, total_streams)``.
            SingularSplitError: If the decimated sequence does not determine
                a unique order-k recurrence. The generator is left unchanged.
        """
        if total_streams < 1 or stream_index < 0 or stream_index >= total_streams:
            raise InvalidSplitError(
                f"invalid argument for {self.name}.split: "
                f"total_streams={total_streams}, stream_index={stream_index}"
            )
        if total_streams == 1:
            return

        k = self.order
        m = self.modulus
        probe = self.copy()
        probe.jump(stream_index + 1)
        q = [probe._r[0]]
        for _ in range(2 * k - 1):
            probe.jump(total_streams)
            q.append(probe._r[0])

        matrix = [[q[k - 1 + i - j] for j in range(k)] for i in range(k)]
        rhs = [q[k + i] for i in range(k)]
        try:
            coefficients = solve(matrix, rhs, m)
        except SingularMatrixError as exc:
            raise SingularSplitError(
                f"{self.name}.split({total_streams}, {stream_index}): decimated sequence "
                f"does not determine a unique order-{k} recurrence"
            ) from exc

        probe._a = tuple(int(c) for c in coefficients)
        probe._r = [q[k - 1 - j] for j in range(k)]
        for _ in range(k):
            probe.backward()

        logger.debug(
            "%s: split into stream %d of %d", self.name, stream_index, total_streams
        )
        self._a = probe._a
        self._r = probe._r

    def try_split(self, total_streams: int, stream_index: int) -> SplitResult:
        """Like :meth:`split` but reports failure as a :class:`SplitResult`."""
        try:
            self.split(total_streams, stream_index)
        except SplitError as exc:
            return SplitResult(ok=False, error=exc)
        return SplitResult(ok=True)

    # --- copying, comparison, representation ---

    def copy(self) -> MRGEngine:
        """Independent copy with the same parameters and state."""
        clone = object.__new__(type(self))
        clone._a = self._a
        clone._r = list(self._r)
        return clone

    __copy__ = copy

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MRGEngine):
            return NotImplemented
        return type(self) is type(other) and self._a == other._a and self._r == other._r

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(parameters={self._a}, state={tuple(self._r)})"

    def __str__(self) -> str:
        return f"[{self.name} {_format_tuple(self._a)} {_format_tuple(self._r)}]"

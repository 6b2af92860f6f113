"""Concrete generator engines and the engine registry."""

from __future__ import annotations

from collections.abc import Sequence

from mrgstream.config.defaults import (
    MRG3S_MODULUS,
    MRG3S_TRNG0,
    MRG3S_TRNG1,
    MRG5S_MODULUS,
    MRG5S_TRNG0,
    MRG5S_TRNG1,
    YARN3S_GENERATOR,
    YARN5S_GENERATOR,
)
from mrgstream.core.engine import MRGEngine, ParameterSet
from mrgstream.core.linalg import MAX_MODULUS


class Mrg3s(MRGEngine):
    """Three-term MRG with a safe prime modulus. Output is ``r1``."""

    name = "mrg3s"
    order = 3
    modulus = MRG3S_MODULUS
    trng0 = MRG3S_TRNG0
    trng1 = MRG3S_TRNG1


class Mrg5s(MRGEngine):
    """Five-term MRG with a safe prime modulus. Output is ``r1``."""

    name = "mrg5s"
    order = 5
    modulus = MRG5S_MODULUS
    trng0 = MRG5S_TRNG0
    trng1 = MRG5S_TRNG1


class _YarnOutput:
    """Mixin: output ``g ** r1 mod m`` instead of ``r1``.

    The exponentiation hides the linear structure of the underlying
    recurrence; jump, split and backward still act on the recurrence.
    """

    generator: int

    def __call__(self) -> int:
        r1 = self.step()  # type: ignore[attr-defined]
        if r1 == 0:
            return 0
        return pow(self.generator, r1, self.modulus)  # type: ignore[attr-defined]


class Yarn3s(_YarnOutput, Mrg3s):
    """mrg3s recurrence with exponentiated output."""

    name = "yarn3s"
    generator = YARN3S_GENERATOR


class Yarn5s(_YarnOutput, Mrg5s):
    """mrg5s recurrence with exponentiated output."""

    name = "yarn5s"
    generator = YARN5S_GENERATOR


ENGINES: dict[str, type[MRGEngine]] = {
    cls.name: cls for cls in (Mrg3s, Mrg5s, Yarn3s, Yarn5s)
}


def engine_class(name: str) -> type[MRGEngine]:
    """Look up an engine class by its name (e.g. ``"mrg3s"``).

    Raises:
        KeyError: If no engine is registered under ``name``.
    """
    try:
        return ENGINES[name]
    except KeyError:
        raise KeyError(f"unknown engine {name!r}, expected one of {sorted(ENGINES)}") from None


def engine_for_order(order: int) -> type[MRGEngine]:
    """The plain MRG engine of the given order (3 or 5)."""
    for cls in (Mrg3s, Mrg5s):
        if cls.order == order:
            return cls
    raise KeyError(f"no canonical engine of order {order}")


def custom_engine(
    name: str,
    modulus: int,
    parameters: ParameterSet | Sequence[int],
    alternate: ParameterSet | Sequence[int] | None = None,
) -> type[MRGEngine]:
    """Build an engine class for an arbitrary order and modulus.

    The period and equidistribution guarantees of the canonical engines do
    not carry over. ``parameters`` becomes the class's ``trng0`` (the
    default set) and ``alternate`` its ``trng1``. Classes built here are not
    picklable by reference; copy instances with :meth:`MRGEngine.copy`.

    Raises:
        ValueError: If ``modulus`` is outside ``[2, 2**31]``, the range the
            int64 jump kernels support.
    """
    if not 2 <= modulus <= MAX_MODULUS:
        raise ValueError(f"modulus must be in [2, 2**31], got {modulus}")
    default = ParameterSet(tuple(parameters))
    second = default if alternate is None else ParameterSet(tuple(alternate))
    attrs = {
        "name": name,
        "order": default.order,
        "modulus": modulus,
        "trng0": default,
        "trng1": second,
        "__module__": __name__,
    }
    return type(name.capitalize(), (MRGEngine,), attrs)

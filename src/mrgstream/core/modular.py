"""Scalar arithmetic over a prime field Z/mZ.

Operands are at most 31 bits wide, so products fit in 62 bits. Python
integers never overflow; the numpy kernels in ``linalg`` rely on the same
bound to stay inside int64.
"""

from __future__ import annotations

from math import gcd

from mrgstream.utils.exceptions import NotInvertibleError


def reduce(value: int, modulus: int) -> int:
    """Normalize ``value`` into ``[0, modulus)``, wrapping negatives."""
    return value % modulus


def mulmod(a: int, b: int, modulus: int) -> int:
    """Return ``(a * b) mod modulus`` in ``[0, modulus)``."""
    return (a * b) % modulus


def modinv(a: int, modulus: int) -> int:
    """Multiplicative inverse of ``a`` modulo ``modulus``.

    Args:
        a: Value to invert. Reduced modulo ``modulus`` first.
        modulus: Modulus, normally one of the engine primes.

    Returns:
        ``b`` in ``[0, modulus)`` with ``(a * b) % modulus == 1``.

    Raises:
        NotInvertibleError: If ``gcd(a, modulus) != 1``.
    """
    a %= modulus
    if a == 0 or gcd(a, modulus) != 1:
        raise NotInvertibleError(f"{a} is not invertible modulo {modulus}")
    return pow(a, -1, modulus)

"""Dense linear algebra modulo a prime.

All matrices are small (k x k with k the recurrence order), held as int64
numpy arrays with entries in ``[0, m)``. Every elementwise product is reduced
before summation: a product of two entries is below 2**62 and a row sum of k
reduced terms stays far from the int64 limit.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from mrgstream.core.modular import modinv
from mrgstream.utils.exceptions import SingularMatrixError

IntMatrix = NDArray[np.int64]
IntVector = NDArray[np.int64]

# Largest modulus for which a product of two reduced entries fits in int64.
MAX_MODULUS = 2**31


def _as_field(values: ArrayLike, modulus: int) -> NDArray[np.int64]:
    result: NDArray[np.int64] = np.asarray(values, dtype=np.int64) % modulus
    return result


def companion_matrix(coefficients: Sequence[int], modulus: int) -> IntMatrix:
    """Build the k x k companion matrix of a k-term linear recurrence.

    The first row holds the coefficients ``a1..ak``; rows ``1..k-1`` form a
    shifted identity, so applying the matrix to the window ``(r1, ..., rk)``
    yields the window after one step.
    """
    k = len(coefficients)
    matrix = np.zeros((k, k), dtype=np.int64)
    matrix[0, :] = _as_field(list(coefficients), modulus)
    if k > 1:
        matrix[1:, :-1] = np.eye(k - 1, dtype=np.int64)
    return matrix


def matmul(a: ArrayLike, b: ArrayLike, modulus: int) -> IntMatrix:
    """Matrix product ``a @ b`` modulo ``modulus``."""
    lhs = _as_field(a, modulus)
    rhs = _as_field(b, modulus)
    if lhs.ndim != 2 or rhs.ndim != 2 or lhs.shape[1] != rhs.shape[0]:
        raise ValueError(f"cannot multiply matrices of shape {lhs.shape} and {rhs.shape}")
    # (n, p, 1) * (1, p, q) -> (n, p, q), reduced, then summed over p
    terms = (lhs[:, :, np.newaxis] * rhs[np.newaxis, :, :]) % modulus
    result: IntMatrix = terms.sum(axis=1) % modulus
    return result


def matvec(a: ArrayLike, v: ArrayLike, modulus: int) -> IntVector:
    """Matrix-vector product ``a @ v`` modulo ``modulus``."""
    matrix = _as_field(a, modulus)
    vector = _as_field(v, modulus)
    if matrix.ndim != 2 or vector.ndim != 1 or matrix.shape[1] != vector.shape[0]:
        raise ValueError(
            f"cannot multiply matrix of shape {matrix.shape} by vector of shape {vector.shape}"
        )
    terms = (matrix * vector[np.newaxis, :]) % modulus
    result: IntVector = terms.sum(axis=1) % modulus
    return result


def matpow(a: ArrayLike, exponent: int, modulus: int) -> IntMatrix:
    """Matrix power ``a ** exponent`` modulo ``modulus`` by repeated squaring."""
    if exponent < 0:
        raise ValueError("exponent must be non-negative")
    base = _as_field(a, modulus)
    if base.ndim != 2 or base.shape[0] != base.shape[1]:
        raise ValueError(f"matrix must be square, got shape {base.shape}")
    result: IntMatrix = np.eye(base.shape[0], dtype=np.int64) % modulus
    while exponent > 0:
        if exponent & 1:
            result = matmul(result, base, modulus)
        exponent >>= 1
        if exponent:
            base = matmul(base, base, modulus)
    return result


def solve(a: ArrayLike, b: ArrayLike, modulus: int) -> IntVector:
    """Solve ``a @ x == b (mod modulus)`` by Gauss-Jordan elimination.

    Over a prime field any non-zero entry is a valid pivot, so the pivot for
    each column is the first row at or below the diagonal with a non-zero
    entry in that column.

    Args:
        a: (n, n) coefficient matrix.
        b: (n,) right-hand side.
        modulus: Prime modulus.

    Returns:
        (n,) solution vector with entries in ``[0, modulus)``.

    Raises:
        SingularMatrixError: If ``a`` is singular modulo ``modulus``.
        ValueError: If the shapes are inconsistent.
    """
    matrix = _as_field(a, modulus)
    rhs = _as_field(b, modulus)
    n = rhs.shape[0] if rhs.ndim == 1 else -1
    if matrix.shape != (n, n):
        raise ValueError(
            f"expected an (n, n) matrix and (n,) vector, got {matrix.shape} and {rhs.shape}"
        )

    augmented = np.concatenate([matrix, rhs[:, np.newaxis]], axis=1)
    for col in range(n):
        candidates = np.flatnonzero(augmented[col:, col])
        if candidates.size == 0:
            raise SingularMatrixError(
                f"matrix is singular modulo {modulus} (no pivot in column {col})"
            )
        pivot = col + int(candidates[0])
        if pivot != col:
            augmented[[col, pivot]] = augmented[[pivot, col]]

        inverse = modinv(int(augmented[col, col]), modulus)
        augmented[col] = (augmented[col] * inverse) % modulus

        factors = augmented[:, col].copy()
        factors[col] = 0
        elimination = (factors[:, np.newaxis] * augmented[col][np.newaxis, :]) % modulus
        augmented = (augmented - elimination) % modulus

    solution: IntVector = augmented[:, n].copy()
    return solution

r"""Dense complex-matrix helpers shared by the builder and the solver.

Every matrix handled here is a square ``complex128`` :class:`numpy.ndarray`
indexed as ``M[i, j]`` (row ``i``, column ``j``).  The helpers mirror the
individual algebraic steps used to assemble the oscillator Hamiltonian so
that each step can be checked on its own.
"""

from __future__ import annotations

import numpy as np

from .errors import AllocationFailure

ROUNDING_DECIMALS = 5


def allocate_complex_matrix(n: int) -> np.ndarray:
    """Return a zero-initialised ``n x n`` complex matrix.

    A :class:`MemoryError` from numpy is re-raised as
    :class:`~quantum_eigen.errors.AllocationFailure`.
    """

    try:
        return np.zeros((n, n), dtype=np.complex128)
    except MemoryError as exc:
        raise AllocationFailure(f"could not allocate a {n}x{n} complex matrix") from exc


def allocate_real_vector(n: int) -> np.ndarray:
    try:
        return np.zeros(n, dtype=np.float64)
    except MemoryError as exc:
        raise AllocationFailure(f"could not allocate a real vector of length {n}") from exc


def conjugate_transpose(matrix: np.ndarray) -> np.ndarray:
    r"""Return :math:`M^\dagger`, i.e. ``result[i, j] = conj(M[j, i])``."""

    return np.ascontiguousarray(np.conj(matrix).T)


def multiply_diagonal(diagonal: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    """Left-multiply ``matrix`` by ``diag(diagonal)``.

    This scales row ``i`` by ``diagonal[i]``: ``result[i, j] = D[i] * M[i, j]``.
    """

    diagonal = np.asarray(diagonal)
    if diagonal.shape != (matrix.shape[0],):
        raise ValueError(
            f"diagonal of length {diagonal.shape[0]} does not match a "
            f"{matrix.shape[0]}x{matrix.shape[1]} matrix"
        )
    return diagonal[:, np.newaxis] * matrix


def multiply(left: np.ndarray, right: np.ndarray) -> np.ndarray:
    """Dense complex matrix product ``left @ right``.

    BLAS may accumulate the inner sums in a different order than a plain
    triple loop, so results agree with it to a few ulps, not bit for bit.
    """

    if left.shape[1] != right.shape[0]:
        raise ValueError(f"cannot multiply {left.shape} by {right.shape}")
    try:
        return np.matmul(left, right)
    except MemoryError as exc:
        raise AllocationFailure("could not allocate the matrix product") from exc


def round_half_away(values: np.ndarray, decimals: int = ROUNDING_DECIMALS) -> np.ndarray:
    """Round to ``decimals`` places with halves rounded away from zero.

    numpy's :func:`numpy.round` rounds halves to even; the Hamiltonian output
    uses the C ``round`` convention instead, so ``0.000005`` becomes ``0.00001``.
    """

    scaled = np.asarray(values, dtype=np.float64) * 10.0 ** decimals
    truncated = np.trunc(scaled)
    # scaled - truncated is exact, so values just below a half never round up
    rounded = np.where(np.abs(scaled - truncated) >= 0.5, truncated + np.sign(scaled), truncated)
    return rounded / 10.0 ** decimals


def round_complex(matrix: np.ndarray, decimals: int = ROUNDING_DECIMALS) -> np.ndarray:
    """Round the real and imaginary parts of every entry independently."""

    rounded = np.empty(np.shape(matrix), dtype=np.complex128)
    # sign() * floor() can produce -0.0; adding 0.0 normalises it
    rounded.real = round_half_away(np.real(matrix), decimals) + 0.0
    rounded.imag = round_half_away(np.imag(matrix), decimals) + 0.0
    return rounded


def is_hermitian(matrix: np.ndarray, atol: float = 1e-12) -> bool:
    """Return ``True`` when ``matrix`` equals its conjugate transpose."""

    matrix = np.asarray(matrix)
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        return False
    return bool(np.allclose(matrix, np.conj(matrix).T, rtol=0.0, atol=atol))

r"""Flat wire format for complex matrices.

Matrices travel between components as flat lists of ``2 * n * n`` floats in
which every complex entry occupies two consecutive slots ``(re, im)``.

* Row-major: entry ``(i, j)`` sits at index ``2 * (i * n + j)``.  The
  Hamiltonian builder emits this layout and the eigensolver accepts it.
* Column-major: entry ``(i, j)`` sits at index ``2 * (j * n + i)``.  The
  eigensolver emits its eigenvectors in this layout, so every consecutive
  block of ``2 * n`` floats is one eigenvector.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .errors import WireFormatMismatch


def expected_length(n: int) -> int:
    """Number of floats used to encode an ``n x n`` complex matrix."""

    return 2 * n * n


def _interleave(flat: np.ndarray) -> list[float]:
    pairs = np.empty(2 * flat.size, dtype=np.float64)
    pairs[0::2] = flat.real
    pairs[1::2] = flat.imag
    return pairs.tolist()


def _deinterleave(values: Sequence[float], n: int) -> np.ndarray:
    values = np.asarray(values, dtype=np.float64).ravel()
    if values.size != expected_length(n):
        raise WireFormatMismatch(expected_length(n), values.size)
    return values[0::2] + 1j * values[1::2]


def encode_row_major(matrix: np.ndarray) -> list[float]:
    """Flatten ``matrix`` row by row into interleaved ``(re, im)`` pairs."""

    return _interleave(np.asarray(matrix, dtype=np.complex128).ravel(order="C"))


def decode_row_major(values: Sequence[float], n: int) -> np.ndarray:
    """Inverse of :func:`encode_row_major`.

    Raises
    ------
    WireFormatMismatch
        If ``values`` does not hold exactly ``2 * n * n`` floats.
    """

    return _deinterleave(values, n).reshape((n, n), order="C")


def encode_column_major(matrix: np.ndarray) -> list[float]:
    """Flatten ``matrix`` column by column into interleaved pairs."""

    return _interleave(np.asarray(matrix, dtype=np.complex128).ravel(order="F"))


def decode_column_major(values: Sequence[float], n: int) -> np.ndarray:
    """Inverse of :func:`encode_column_major`."""

    return _deinterleave(values, n).reshape((n, n), order="F")

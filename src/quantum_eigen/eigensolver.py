r"""Eigen-decomposition of complex Hermitian matrices.

:class:`HermitianEigensolver` stores one ``n x n`` matrix received as a
row-major wire list and diagonalises it with LAPACK ``zheev`` (upper
triangle, eigenvectors requested) through :mod:`scipy.linalg.lapack`.

Layout of the two outputs
~~~~~~~~~~~~~~~~~~~~~~~~~

* eigenvalues: ``n`` reals in ascending order, as returned by LAPACK;
* eigenvectors: ``2 * n * n`` reals in **column-major** order, so entry
  ``(i, j)`` (component ``i`` of eigenvector ``j``) sits at
  ``2 * (j * n + i)``.

The input is row-major while the eigenvector output is column-major.  The
eigenvector list is the LAPACK working matrix passed through unchanged and
existing consumers read it that way, so the asymmetry is kept on purpose.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
from scipy.linalg import lapack

from .errors import AllocationFailure, InvalidDimension, InvalidParameter, NoInputAvailable, NumericalFailure
from .wire import decode_row_major, encode_column_major

logger = logging.getLogger(__name__)

DEFAULT_DIMENSION = 3


@dataclass(slots=True)
class EigenDecomposition:
    """Eigenvalues and eigenvectors of one stored matrix.

    Attributes
    ----------
    eigenvalues : numpy.ndarray
        ``n`` real eigenvalues in ascending order.
    eigenvectors : numpy.ndarray
        ``n x n`` complex matrix whose column ``j`` is the normalised
        eigenvector belonging to ``eigenvalues[j]``.
    """

    eigenvalues: np.ndarray
    eigenvectors: np.ndarray

    @property
    def n(self) -> int:
        return self.eigenvalues.shape[0]

    def eigenvector(self, j: int) -> np.ndarray:
        """Return eigenvector ``j`` as a 1-D complex array."""

        return self.eigenvectors[:, j].copy()

    def eigenvalue_list(self) -> list[float]:
        return self.eigenvalues.tolist()

    def eigenvector_list(self) -> list[float]:
        """Column-major interleaved ``(re, im)`` list of the eigenvectors."""

        return encode_column_major(self.eigenvectors)


def _check_dimension(n: int) -> int:
    if isinstance(n, bool) or int(n) != n:
        raise InvalidParameter(f"dimension must be an integer, got {n!r}")
    if n <= 0:
        raise InvalidDimension(n, 1)
    return int(n)


def hermitian_eigh(matrix: np.ndarray) -> EigenDecomposition:
    """Diagonalise ``matrix`` with ``zheev`` reading only its upper triangle.

    Raises
    ------
    NumericalFailure
        If the workspace query or the decomposition returns ``info != 0``.
    """

    try:
        # zheev works in place on a column-major copy
        work_matrix = np.array(matrix, dtype=np.complex128, order="F", copy=True)
    except MemoryError as exc:
        raise AllocationFailure("could not allocate the LAPACK working matrix") from exc

    n = work_matrix.shape[0]
    heev, heev_lwork = lapack.get_lapack_funcs(("heev", "heev_lwork"), (work_matrix,))

    work_query, info = heev_lwork(n, lower=0)
    if info != 0:
        raise NumericalFailure("workspace query", info)
    lwork = max(int(np.real(work_query)) + 1, 1)
    logger.debug("zheev workspace for n=%d: lwork=%d", n, lwork)

    w, v, info = heev(work_matrix, compute_v=1, lower=0, lwork=lwork, overwrite_a=1)
    if info != 0:
        raise NumericalFailure("decomposition", info)

    return EigenDecomposition(np.asarray(w, dtype=np.float64), np.asarray(v, dtype=np.complex128))


class HermitianEigensolver:
    """Stateful wrapper that stores a matrix and diagonalises it on request.

    The solver is either *empty* (no matrix) or *ready*.  :meth:`accept`
    replaces the stored matrix wholesale, :meth:`decompose` leaves it in
    place, and changing the dimension with :meth:`set_dimension` empties it.

    Examples
    --------
    >>> solver = HermitianEigensolver(2)
    >>> solver.accept([3.0, 0.0, 0.0, 0.0, 0.0, 0.0, 1.0, 0.0])
    >>> solver.decompose().eigenvalue_list()
    [1.0, 3.0]
    """

    def __init__(self, n: int = DEFAULT_DIMENSION):
        self._n = _check_dimension(n)
        self._matrix: Optional[np.ndarray] = None

    def __repr__(self) -> str:
        state = "ready" if self.has_matrix else "empty"
        return f"HermitianEigensolver(n={self._n}, {state})"

    @property
    def n(self) -> int:
        return self._n

    @property
    def has_matrix(self) -> bool:
        return self._matrix is not None

    @property
    def stored_matrix(self) -> Optional[np.ndarray]:
        """Copy of the stored matrix, or ``None`` while the solver is empty."""

        return None if self._matrix is None else self._matrix.copy()

    def set_dimension(self, n: int) -> None:
        """Change the dimension; any stored matrix is discarded.

        Setting the current dimension again is a no-op and keeps the matrix.
        """

        try:
            n = _check_dimension(n)
        except ValueError as exc:
            logger.error("Rejected dimension: %s", exc)
            raise
        if n == self._n:
            return
        self._n = n
        self._matrix = None
        logger.info("Dimension set to %d", n)

    def accept(self, values: Sequence[float]) -> None:
        """Store a row-major interleaved matrix of ``2 * n * n`` floats.

        Raises
        ------
        WireFormatMismatch
            If the element count is wrong; the previously stored matrix (if
            any) is kept.
        """

        try:
            matrix = decode_row_major(values, self._n)
        except ValueError as exc:
            logger.error("Rejected input matrix: %s", exc)
            raise
        except MemoryError as exc:
            logger.error("Memory allocation failed for matrix storage.")
            raise AllocationFailure("could not store the input matrix") from exc
        self._matrix = matrix
        logger.info("Complex matrix stored (dimension %d).", self._n)

    def decompose(self) -> EigenDecomposition:
        """Diagonalise the stored matrix.

        Raises
        ------
        NoInputAvailable
            If no matrix has been accepted yet.
        NumericalFailure
            If LAPACK reports a non-zero status.
        """

        if self._matrix is None:
            logger.error("No matrix stored. Use accept() first.")
            raise NoInputAvailable()
        try:
            result = hermitian_eigh(self._matrix)
        except NumericalFailure as exc:
            logger.error("Eigen-decomposition failed during %s: info=%d", exc.stage, exc.info)
            raise
        logger.info("Eigen-decomposition completed successfully.")
        return result

    def emit(self) -> tuple[list[float], list[float]]:
        """Return ``(eigenvalues, eigenvectors)`` as wire lists.

        The eigenvector list is column-major; see the module docstring.
        """

        result = self.decompose()
        return result.eigenvalue_list(), result.eigenvector_list()

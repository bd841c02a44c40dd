r"""Discretised quantum harmonic oscillator Hamiltonian.

The Hamiltonian is assembled on an ``n``-point grid as

.. math::

   H = \tfrac12 \left(P^2 + Q^2\right),

where the momentum operator is diagonal in the Fourier basis and the
position operator is diagonal on the grid:

.. math::

   F_{kl} = \frac{1}{\sqrt n} e^{2\pi i k l / n}, \qquad
   P = F \,\mathrm{diag}(0, 1, \dots, n-1)\, F^\dagger, \qquad
   Q_i = a\left(-\frac{n-1}{2} + i\right).

Every entry of the result is rounded to five decimals (halves away from
zero) so that repeated builds give bit-identical wire output.

Functions provided
------------------

* :func:`fourier_matrix` -- the unitary DFT matrix :math:`F`.
* :func:`momentum_operator` -- :math:`P` in the position basis.
* :func:`position_diagonal` -- the diagonal of :math:`Q`.
* :func:`build_hamiltonian` -- the full (optionally rounded) :math:`H`.

:class:`HamiltonianBuilder` wraps these around a validated
:class:`HamiltonianParameters` instance.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from . import complex_matrix as cm
from .errors import AllocationFailure, InvalidDimension, InvalidParameter
from .wire import encode_row_major

logger = logging.getLogger(__name__)

MIN_DIMENSION = 2
DEFAULT_DIMENSION = 8
DEFAULT_POTENTIAL_WEIGHT = 1.0


@dataclass(frozen=True, slots=True)
class HamiltonianParameters:
    """Grid size ``n`` and potential weight ``a`` of the oscillator."""

    n: int = DEFAULT_DIMENSION
    a: float = DEFAULT_POTENTIAL_WEIGHT

    def __post_init__(self):
        if isinstance(self.n, bool) or int(self.n) != self.n:
            raise InvalidParameter(f"dimension must be an integer, got {self.n!r}")
        if self.n < MIN_DIMENSION:
            raise InvalidDimension(self.n, MIN_DIMENSION)
        if not math.isfinite(self.a):
            raise InvalidParameter(f"potential weight a must be finite, got {self.a!r}")
        object.__setattr__(self, "n", int(self.n))
        object.__setattr__(self, "a", float(self.a))


def fourier_matrix(n: int) -> np.ndarray:
    r"""Return the unitary DFT matrix ``F[k, l] = exp(2πi k l / n) / sqrt(n)``."""

    F = cm.allocate_complex_matrix(n)
    k = np.arange(n)
    angle = 2.0 * np.pi * np.outer(k, k) / n
    F.real = np.cos(angle)
    F.imag = np.sin(angle)
    return F / math.sqrt(n)


def momentum_operator(n: int) -> np.ndarray:
    r"""Return :math:`P = F\,\mathrm{diag}(0,\dots,n-1)\,F^\dagger`.

    The product is evaluated as ``F @ (diag @ F^dagger)``, scaling the rows of
    :math:`F^\dagger` first.
    """

    F = fourier_matrix(n)
    F_inv = cm.conjugate_transpose(F)
    impulse = np.arange(n, dtype=np.float64)
    return cm.multiply(F, cm.multiply_diagonal(impulse, F_inv))


def position_diagonal(n: int, a: float) -> np.ndarray:
    """Return the grid positions ``a * (-(n - 1) / 2 + i)``, centred on zero."""

    Q = cm.allocate_real_vector(n)
    Q[:] = a * (-(n - 1) / 2.0 + np.arange(n, dtype=np.float64))
    return Q


def build_hamiltonian(n: int, a: float, decimals: Optional[int] = cm.ROUNDING_DECIMALS) -> np.ndarray:
    r"""Assemble :math:`H = \tfrac12 (P^2 + Q^2)`.

    Parameters
    ----------
    n : int
        Grid size, at least 2.
    a : float
        Potential weight scaling the position grid.
    decimals : int or None
        Number of decimals kept in the real and imaginary parts.  ``None``
        returns the unrounded matrix.

    Returns
    -------
    numpy.ndarray
        ``n x n`` complex Hermitian matrix.

    Raises
    ------
    InvalidDimension
        If ``n < 2``; checked before anything is allocated.
    AllocationFailure
        If one of the intermediate matrices cannot be allocated.
    """

    if n < MIN_DIMENSION:
        raise InvalidDimension(n, MIN_DIMENSION)

    P = momentum_operator(n)
    P2 = cm.multiply(P, P)
    Q = position_diagonal(n, a)

    H = P2.copy()
    # Q is diagonal, so the potential only touches the diagonal of H
    H[np.diag_indices(n)] += Q * Q
    H *= 0.5

    if decimals is None:
        return H
    return cm.round_complex(H, decimals)


class HamiltonianBuilder:
    """Builds the oscillator Hamiltonian for a fixed set of parameters.

    Examples
    --------
    >>> builder = HamiltonianBuilder(n=2, a=1.0)
    >>> builder.emit()
    [0.375, 0.0, -0.25, 0.0, -0.25, 0.0, 0.375, 0.0]
    """

    def __init__(self, n: int = DEFAULT_DIMENSION, a: float = DEFAULT_POTENTIAL_WEIGHT):
        self._parameters = HamiltonianParameters(n, a)

    def __repr__(self) -> str:
        return f"HamiltonianBuilder(n={self.n}, a={self.a})"

    @property
    def parameters(self) -> HamiltonianParameters:
        return self._parameters

    @property
    def n(self) -> int:
        return self._parameters.n

    @property
    def a(self) -> float:
        return self._parameters.a

    def configure(self, n: Optional[int] = None, a: Optional[float] = None) -> HamiltonianParameters:
        """Replace the parameters; invalid values leave the old ones in place."""

        try:
            parameters = HamiltonianParameters(
                self.n if n is None else n,
                self.a if a is None else a,
            )
        except ValueError as exc:
            logger.error("Rejected Hamiltonian parameters: %s", exc)
            raise
        self._parameters = parameters
        logger.info("Hamiltonian parameters set to n=%d, a=%g", parameters.n, parameters.a)
        return parameters

    def build(self) -> np.ndarray:
        """Return the rounded Hamiltonian as an ``n x n`` complex matrix."""

        try:
            H = build_hamiltonian(self.n, self.a)
        except MemoryError as exc:
            logger.error("Failed to compute Hamiltonian (out of memory?)")
            if isinstance(exc, AllocationFailure):
                raise
            raise AllocationFailure(f"could not build the {self.n}x{self.n} Hamiltonian") from exc
        logger.debug("Built %dx%d Hamiltonian with a=%g", self.n, self.n, self.a)
        return H

    def emit(self) -> list[float]:
        """Return the Hamiltonian as a row-major interleaved wire list."""

        return encode_row_major(self.build())

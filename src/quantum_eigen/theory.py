r"""Closed-form results used to interpret the numerical output.

With :math:`\omega = e^{2\pi i/n}` the momentum operator has the explicit
entries

.. math::

   P_{jj} = \frac{n-1}{2}, \qquad
   P_{jk} = \frac{1}{\omega^{\,j-k} - 1} \quad (j \ne k),

which follows from summing the geometric series
:math:`\frac1n\sum_m m\,\omega^{m(j-k)}`.
"""

from __future__ import annotations

import numpy as np


def momentum_operator_closed_form(n: int) -> np.ndarray:
    """Momentum operator evaluated from the geometric-series formula."""

    j = np.arange(n)
    d = j[:, np.newaxis] - j[np.newaxis, :]
    off = d != 0
    P = np.full((n, n), (n - 1) / 2.0, dtype=np.complex128)
    P[off] = 1.0 / (np.exp(2j * np.pi * d[off] / n) - 1.0)
    return P


def momentum_spectrum(n: int) -> np.ndarray:
    """Eigenvalues of the momentum operator, ``0, 1, ..., n - 1``."""

    return np.arange(n, dtype=float)


def hamiltonian_trace(n: int, a: float) -> float:
    r"""Trace of :math:`\tfrac12(P^2 + Q^2)` before rounding.

    .. math::

       \operatorname{tr} H = \tfrac12\Big(\sum_{m=0}^{n-1} m^2
       + a^2 \sum_{i=0}^{n-1}\big(i - \tfrac{n-1}{2}\big)^2\Big)
       = \tfrac12\Big(\frac{(n-1)n(2n-1)}{6} + a^2\,\frac{n(n^2-1)}{12}\Big).
    """

    kinetic = (n - 1) * n * (2 * n - 1) / 6.0
    potential = a * a * n * (n * n - 1) / 12.0
    return 0.5 * (kinetic + potential)


def two_site_hamiltonian(a: float) -> np.ndarray:
    r"""Hand-derived Hamiltonian for ``n = 2``.

    Here :math:`F = \tfrac{1}{\sqrt2}\begin{pmatrix}1&1\\1&-1\end{pmatrix}`,
    :math:`P = \tfrac12\begin{pmatrix}1&-1\\-1&1\end{pmatrix}` is a projector
    (so :math:`P^2 = P`) and :math:`Q = \pm a/2`, giving

    .. math::

       H = \begin{pmatrix} \tfrac14 + \tfrac{a^2}{8} & -\tfrac14 \\
                           -\tfrac14 & \tfrac14 + \tfrac{a^2}{8}\end{pmatrix}.
    """

    diagonal = 0.25 + a * a / 8.0
    return np.array([[diagonal, -0.25], [-0.25, diagonal]], dtype=np.complex128)


def two_site_spectrum(a: float) -> np.ndarray:
    """Eigenvalues of :func:`two_site_hamiltonian`, ascending."""

    return np.array([a * a / 8.0, 0.5 + a * a / 8.0])

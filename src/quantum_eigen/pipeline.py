"""Compose the builder and the solver through the wire format.

The two components never share objects: the builder's row-major list is
handed to the solver exactly as a host would route it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np
from tqdm import tqdm

from .eigensolver import EigenDecomposition, HermitianEigensolver
from .hamiltonian import DEFAULT_DIMENSION, DEFAULT_POTENTIAL_WEIGHT, HamiltonianBuilder, HamiltonianParameters

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class OscillatorSpectrum:
    """Hamiltonian wire list and its decomposition for one parameter set."""

    parameters: HamiltonianParameters
    hamiltonian: list[float]
    decomposition: EigenDecomposition

    @property
    def energies(self) -> np.ndarray:
        return self.decomposition.eigenvalues


def solve_oscillator(
    n: int = DEFAULT_DIMENSION,
    a: float = DEFAULT_POTENTIAL_WEIGHT,
    solver: Optional[HermitianEigensolver] = None,
) -> OscillatorSpectrum:
    """Build the Hamiltonian for ``(n, a)`` and diagonalise it.

    Parameters
    ----------
    n, a : int, float
        Oscillator parameters forwarded to :class:`HamiltonianBuilder`.
    solver : HermitianEigensolver, optional
        Solver to reuse.  Its dimension is switched to ``n`` if needed.
    """

    builder = HamiltonianBuilder(n, a)
    wire = builder.emit()

    if solver is None:
        solver = HermitianEigensolver(n)
    else:
        solver.set_dimension(n)
    solver.accept(wire)
    return OscillatorSpectrum(builder.parameters, wire, solver.decompose())


def scan_dimensions(
    dimensions: Iterable[int],
    a: float = DEFAULT_POTENTIAL_WEIGHT,
    levels: int = 4,
    progress: bool = True,
) -> dict[int, np.ndarray]:
    """Return the lowest ``levels`` energies for every grid size in ``dimensions``.

    Grids smaller than ``levels`` contribute all of their energies.
    """

    dimensions = list(dimensions)
    solver = HermitianEigensolver(dimensions[0]) if dimensions else None
    energies: dict[int, np.ndarray] = {}
    for n in tqdm(dimensions, disable=not progress):
        spectrum = solve_oscillator(n, a, solver=solver)
        energies[n] = spectrum.energies[:levels].copy()
        logger.debug("n=%d lowest energies: %s", n, energies[n])
    return energies

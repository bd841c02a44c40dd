"""Visualisation helpers for oscillator spectra."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

import matplotlib.pyplot as plt
import numpy as np

from .eigensolver import EigenDecomposition
from .hamiltonian import position_diagonal


def _save(fig, filename: Optional[str | Path]) -> None:
    if filename is not None:
        path = Path(filename)
        path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(path, dpi=300)
    plt.close(fig)


def plot_spectrum(
    energies: Iterable[float],
    filename: Optional[str | Path] = None,
    title: str = "Oscillator spectrum",
) -> None:
    """Draw the energy levels as horizontal lines."""

    energies = np.asarray(energies, dtype=float)

    fig, ax = plt.subplots(figsize=(4.5, 6.0))
    for k, energy in enumerate(energies):
        ax.hlines(energy, 0.0, 1.0, color="#4682b4", linewidth=1.5)
        ax.text(1.02, energy, f"{k}", va="center", fontsize=8)

    ax.set_xlim(0.0, 1.15)
    ax.set_xticks([])
    ax.set_ylabel("Energy")
    ax.set_title(title)
    fig.tight_layout()
    _save(fig, filename)


def plot_eigenvectors(
    decomposition: EigenDecomposition,
    a: float,
    levels: int = 4,
    filename: Optional[str | Path] = None,
) -> None:
    """Plot ``|v_j|^2`` of the lowest eigenvectors, offset by their energy.

    The horizontal axis is the position grid ``Q`` used to build the
    Hamiltonian, so ``a`` must match the value passed to the builder.
    """

    n = decomposition.n
    positions = position_diagonal(n, a)
    levels = min(levels, n)

    fig, ax = plt.subplots(figsize=(8.0, 4.5))
    for j in range(levels):
        energy = decomposition.eigenvalues[j]
        density = np.abs(decomposition.eigenvector(j)) ** 2
        ax.axhline(energy, linestyle="--", linewidth=0.8, color="grey")
        ax.plot(positions, density + energy, marker="o", markersize=3, label=f"E{j}={energy:.4f}")

    ax.set_xlabel("Position Q")
    ax.set_ylabel("Energy / |v|²")
    ax.set_title(f"Lowest eigenvectors (n={n}, a={a:g})")
    ax.legend(fontsize=8)
    fig.tight_layout()
    _save(fig, filename)

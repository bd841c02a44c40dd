"""Command-line entry point for the :mod:`quantum_eigen` package."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .errors import QuantumEigenError
from .hamiltonian import DEFAULT_DIMENSION, DEFAULT_POTENTIAL_WEIGHT
from .pipeline import solve_oscillator
from .visualisation import plot_eigenvectors


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Build the discretised harmonic oscillator Hamiltonian "
            "H = (P^2 + Q^2) / 2 and print its eigenvalues."
        )
    )
    parser.add_argument(
        "--n",
        type=int,
        default=DEFAULT_DIMENSION,
        help=f"Grid size, at least 2 (default: {DEFAULT_DIMENSION}).",
    )
    parser.add_argument(
        "--a",
        type=float,
        default=DEFAULT_POTENTIAL_WEIGHT,
        help=f"Potential weight scaling the position grid (default: {DEFAULT_POTENTIAL_WEIGHT}).",
    )
    parser.add_argument(
        "--eigenvectors",
        action="store_true",
        help="Also print the eigenvectors, one per line.",
    )
    parser.add_argument(
        "--wire",
        action="store_true",
        help=(
            "Print the raw wire lists (Hamiltonian row-major, eigenvalues, "
            "eigenvectors column-major) instead of a table."
        ),
    )
    parser.add_argument(
        "--save-plot",
        type=Path,
        default=None,
        metavar="PATH",
        help="Save a plot of the lowest eigenvectors over the position grid.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING).",
    )
    return parser.parse_args(argv)


def _format_list(values: list[float]) -> str:
    return " ".join(f"{v:.10g}" for v in values)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    try:
        spectrum = solve_oscillator(args.n, args.a)
    except QuantumEigenError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    decomposition = spectrum.decomposition
    if args.wire:
        print(_format_list(spectrum.hamiltonian))
        print(_format_list(decomposition.eigenvalue_list()))
        print(_format_list(decomposition.eigenvector_list()))
    else:
        print("Harmonic oscillator spectrum")
        print("----------------------------")
        print(f"Grid size n: {args.n}")
        print(f"Potential weight a: {args.a}")
        for k, energy in enumerate(decomposition.eigenvalues):
            print(f"E[{k}] = {energy:.6f}")

        if args.eigenvectors:
            for j in range(decomposition.n):
                components = " ".join(f"{z.real:+.5f}{z.imag:+.5f}j" for z in decomposition.eigenvector(j))
                print(f"v[{j}] = {components}")

    if args.save_plot is not None:
        plot_eigenvectors(decomposition, args.a, filename=args.save_plot)
        print(f"Saved eigenvector plot to {args.save_plot}")

    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())

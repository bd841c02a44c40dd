"""Discretised harmonic oscillator Hamiltonians and Hermitian eigen-decomposition."""

from . import complex_matrix, eigensolver, errors, hamiltonian, pipeline, theory, visualisation, wire
from .eigensolver import EigenDecomposition, HermitianEigensolver
from .errors import (
    AllocationFailure,
    InvalidDimension,
    InvalidParameter,
    NoInputAvailable,
    NumericalFailure,
    QuantumEigenError,
    WireFormatMismatch,
)
from .hamiltonian import HamiltonianBuilder, HamiltonianParameters, build_hamiltonian
from .pipeline import OscillatorSpectrum, scan_dimensions, solve_oscillator

__all__ = [
    "AllocationFailure",
    "EigenDecomposition",
    "HamiltonianBuilder",
    "HamiltonianParameters",
    "HermitianEigensolver",
    "InvalidDimension",
    "InvalidParameter",
    "NoInputAvailable",
    "NumericalFailure",
    "OscillatorSpectrum",
    "QuantumEigenError",
    "WireFormatMismatch",
    "build_hamiltonian",
    "complex_matrix",
    "eigensolver",
    "errors",
    "hamiltonian",
    "pipeline",
    "scan_dimensions",
    "solve_oscillator",
    "theory",
    "visualisation",
    "wire",
]

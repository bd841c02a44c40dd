"""Exceptions raised by the Hamiltonian builder and the Hermitian eigensolver."""

from __future__ import annotations

import numpy as np


class QuantumEigenError(Exception):
    """Base class for every error reported by :mod:`quantum_eigen`."""


class InvalidDimension(QuantumEigenError, ValueError):
    """The requested matrix dimension is below the allowed minimum."""

    def __init__(self, n: int, minimum: int):
        self.n = n
        self.minimum = minimum
        super().__init__(f"dimension must be >= {minimum}, got {n}")


class InvalidParameter(QuantumEigenError, ValueError):
    """A construction parameter has the wrong type or is not finite."""


class AllocationFailure(QuantumEigenError, MemoryError):
    """A buffer for the current computation could not be obtained."""


class WireFormatMismatch(QuantumEigenError, ValueError):
    """A flat wire list does not have the expected ``2 * n * n`` entries."""

    def __init__(self, expected: int, received: int):
        self.expected = expected
        self.received = received
        super().__init__(f"wrong element count, expected {expected} got {received}")


class NoInputAvailable(QuantumEigenError, RuntimeError):
    """A decomposition was requested before any matrix was accepted."""

    def __init__(self, message: str = "no matrix stored"):
        super().__init__(message)


class NumericalFailure(QuantumEigenError, np.linalg.LinAlgError):
    """LAPACK reported a non-zero status.

    ``stage`` is either ``"workspace query"`` or ``"decomposition"`` and
    ``info`` is the raw LAPACK status code.
    """

    def __init__(self, stage: str, info: int):
        self.stage = stage
        self.info = int(info)
        super().__init__(f"zheev {stage} failed: info={self.info}")

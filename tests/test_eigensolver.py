"""Tests for the stateful Hermitian eigensolver."""

import numpy as np
import pytest

from quantum_eigen import eigensolver as es
from quantum_eigen.eigensolver import HermitianEigensolver, hermitian_eigh
from quantum_eigen.errors import (
    InvalidDimension,
    InvalidParameter,
    NoInputAvailable,
    NumericalFailure,
    WireFormatMismatch,
)
from quantum_eigen.wire import decode_column_major, encode_row_major


def random_hermitian(n, seed=0):
    rng = np.random.default_rng(seed)
    A = rng.normal(size=(n, n)) + 1j * rng.normal(size=(n, n))
    return 0.5 * (A + A.conj().T)


@pytest.fixture
def hermitian3():
    return random_hermitian(3, seed=42)


@pytest.fixture
def ready_solver(hermitian3):
    solver = HermitianEigensolver(3)
    solver.accept(encode_row_major(hermitian3))
    return solver


class TestConstruction:
    def test_default_dimension(self):
        solver = HermitianEigensolver()
        assert solver.n == 3
        assert not solver.has_matrix
        assert solver.stored_matrix is None

    @pytest.mark.parametrize("n", [0, -2])
    def test_invalid_dimension(self, n):
        with pytest.raises(InvalidDimension):
            HermitianEigensolver(n)

    def test_one_by_one(self):
        solver = HermitianEigensolver(1)
        solver.accept([2.5, 0.0])
        values, vectors = solver.emit()
        assert values == pytest.approx([2.5])
        assert abs(complex(vectors[0], vectors[1])) == pytest.approx(1.0)


class TestAccept:
    def test_stores_row_major_input(self, hermitian3, ready_solver):
        assert ready_solver.has_matrix
        assert np.array_equal(ready_solver.stored_matrix, hermitian3)

    def test_wrong_count_rejected_on_empty_solver(self):
        solver = HermitianEigensolver(3)
        with pytest.raises(WireFormatMismatch, match="expected 18 got 17"):
            solver.accept([0.0] * 17)
        assert not solver.has_matrix

    def test_wrong_count_keeps_previous_matrix(self, hermitian3, ready_solver):
        with pytest.raises(WireFormatMismatch):
            ready_solver.accept([1.0] * 17)
        assert np.array_equal(ready_solver.stored_matrix, hermitian3)

    def test_new_matrix_replaces_old(self, ready_solver):
        replacement = random_hermitian(3, seed=7)
        ready_solver.accept(encode_row_major(replacement))
        assert np.array_equal(ready_solver.stored_matrix, replacement)

    def test_stored_matrix_is_a_copy(self, hermitian3, ready_solver):
        ready_solver.stored_matrix[0, 0] = 99.0
        assert np.array_equal(ready_solver.stored_matrix, hermitian3)


class TestDecompose:
    def test_empty_solver_fails(self):
        solver = HermitianEigensolver(3)
        with pytest.raises(NoInputAvailable, match="no matrix stored"):
            solver.decompose()
        assert not solver.has_matrix

    def test_known_spectrum(self):
        M = np.array([[2.0, 1j], [-1j, 2.0]])
        solver = HermitianEigensolver(2)
        solver.accept(encode_row_major(M))
        result = solver.decompose()
        assert np.allclose(result.eigenvalues, [1.0, 3.0], atol=1e-12)

    @pytest.mark.parametrize("n", [2, 3, 5, 9])
    def test_eigen_reconstruction(self, n):
        M = random_hermitian(n, seed=n)
        solver = HermitianEigensolver(n)
        solver.accept(encode_row_major(M))
        result = solver.decompose()
        scale = np.max(np.abs(result.eigenvalues))
        for j in range(n):
            v = result.eigenvector(j)
            assert np.allclose(M @ v, result.eigenvalues[j] * v, atol=1e-9 * scale)
            assert np.linalg.norm(v) == pytest.approx(1.0)

    def test_eigenvalues_ascending(self, ready_solver):
        w = ready_solver.decompose().eigenvalues
        assert np.all(np.diff(w) >= 0.0)

    def test_eigenvalues_match_numpy(self, hermitian3, ready_solver):
        assert np.allclose(ready_solver.decompose().eigenvalues, np.linalg.eigvalsh(hermitian3), atol=1e-12)

    def test_only_upper_triangle_is_read(self, hermitian3):
        corrupted = hermitian3.copy()
        corrupted[np.tril_indices(3, k=-1)] = 100.0 + 50.0j
        solver = HermitianEigensolver(3)
        solver.accept(encode_row_major(corrupted))
        expected = np.linalg.eigvalsh(hermitian3)
        assert np.allclose(solver.decompose().eigenvalues, expected, atol=1e-12)

    def test_idempotent(self, ready_solver):
        first = ready_solver.emit()
        second = ready_solver.emit()
        assert first == second
        assert ready_solver.has_matrix

    def test_eigenvector_output_is_column_major(self, ready_solver):
        result = ready_solver.decompose()
        values = result.eigenvector_list()
        n = 3
        assert len(values) == 2 * n * n
        for i in range(n):
            for j in range(n):
                assert values[2 * (j * n + i)] == result.eigenvectors[i, j].real
                assert values[2 * (j * n + i) + 1] == result.eigenvectors[i, j].imag
        assert np.array_equal(decode_column_major(values, n), result.eigenvectors)

    def test_emit_lists(self, ready_solver):
        values, vectors = ready_solver.emit()
        assert len(values) == 3
        assert len(vectors) == 18
        assert all(isinstance(v, float) for v in values)


class TestNumericalFailure:
    def test_workspace_query_failure(self, monkeypatch, ready_solver, hermitian3):
        def fake_funcs(names, arrays):
            def heev(*args, **kwargs):
                raise AssertionError("decomposition must not run after a failed query")

            def heev_lwork(n, lower=0):
                return 1.0, -1

            return heev, heev_lwork

        monkeypatch.setattr(es.lapack, "get_lapack_funcs", fake_funcs)
        with pytest.raises(NumericalFailure) as excinfo:
            ready_solver.decompose()
        assert excinfo.value.stage == "workspace query"
        assert excinfo.value.info == -1
        assert np.array_equal(ready_solver.stored_matrix, hermitian3)

    def test_decomposition_failure(self, monkeypatch, ready_solver):
        def fake_funcs(names, arrays):
            def heev(a, compute_v=1, lower=0, lwork=1, overwrite_a=0):
                return np.zeros(3), np.zeros((3, 3), dtype=complex), 2

            def heev_lwork(n, lower=0):
                return 10.0, 0

            return heev, heev_lwork

        monkeypatch.setattr(es.lapack, "get_lapack_funcs", fake_funcs)
        with pytest.raises(NumericalFailure, match="info=2") as excinfo:
            ready_solver.emit()
        assert excinfo.value.stage == "decomposition"
        assert ready_solver.has_matrix

    def test_numerical_failure_is_linalg_error(self):
        assert issubclass(NumericalFailure, np.linalg.LinAlgError)


class TestSetDimension:
    def test_same_dimension_keeps_matrix(self, ready_solver):
        ready_solver.set_dimension(3)
        assert ready_solver.has_matrix

    def test_new_dimension_clears_matrix(self, ready_solver):
        ready_solver.set_dimension(4)
        assert ready_solver.n == 4
        assert not ready_solver.has_matrix
        with pytest.raises(NoInputAvailable):
            ready_solver.decompose()

    def test_accepts_new_length_after_change(self, ready_solver):
        ready_solver.set_dimension(2)
        with pytest.raises(WireFormatMismatch):
            ready_solver.accept([0.0] * 18)
        ready_solver.accept([1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 2.0, 0.0])
        assert np.allclose(ready_solver.decompose().eigenvalues, [1.0, 2.0])

    def test_non_integer_dimension_logs_reason(self, ready_solver, caplog):
        with caplog.at_level("ERROR", logger="quantum_eigen.eigensolver"):
            with pytest.raises(InvalidParameter):
                ready_solver.set_dimension(2.5)
        assert "dimension must be an integer" in caplog.text
        assert "> 0" not in caplog.text
        assert ready_solver.n == 3
        assert ready_solver.has_matrix

    @pytest.mark.parametrize("n", [0, -1])
    def test_invalid_dimension_keeps_state(self, ready_solver, n):
        with pytest.raises(InvalidDimension):
            ready_solver.set_dimension(n)
        assert ready_solver.n == 3
        assert ready_solver.has_matrix


def test_hermitian_eigh_does_not_modify_input(hermitian3):
    before = hermitian3.copy()
    hermitian_eigh(hermitian3)
    assert np.array_equal(hermitian3, before)

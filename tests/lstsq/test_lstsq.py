"""
Tests for solve(), lstsq() and pseudo_inverse().

Full-rank problems are checked against numpy.linalg.lstsq; rank-deficient
problems against a truncated-SVD pseudo-inverse.
"""

import warnings

import numpy as np
import pytest

from pysvd import lstsq, pseudo_inverse, solve
from pysvd.core.exceptions import ConvergenceError, DimensionError, ValidationError
from pysvd.linalg.matrix import Matrix, matrix
from pysvd.lstsq import LeastSquaresDesign, LeastSquaresSolution
from pysvd.lstsq.backends import PseudoInverseBackend, pseudo_inverse_diagonal
from pysvd.svd.design import SVDDesign


def _truncated_pinv(A, rcond=1e-10):
    """Pseudo-inverse dropping singular values below rcond * max."""
    U, s, Vt = np.linalg.svd(A, full_matrices=False)
    s_inv = np.zeros_like(s)
    keep = s > rcond * s[0]
    s_inv[keep] = 1.0 / s[keep]
    return Vt.T @ np.diag(s_inv) @ U.T


# ═══════════════════════════════════════════════════════════════════════
# solve
# ═══════════════════════════════════════════════════════════════════════


class TestSolve:

    def test_square_system(self):
        x = solve(matrix([1, 2, 3, 4], 2), [1, 1])
        np.testing.assert_allclose(x, [-1.0, 1.0], atol=1e-12)

    def test_nested_list_input(self):
        x = solve([[1, 2], [3, 4]], [1, 1])
        np.testing.assert_allclose(x, [-1.0, 1.0], atol=1e-12)

    def test_overdetermined_matches_numpy(self, rng):
        A = rng.standard_normal((20, 4))
        b = rng.standard_normal(20)
        expected, *_ = np.linalg.lstsq(A, b, rcond=None)
        np.testing.assert_allclose(solve(A, b), expected, rtol=1e-10, atol=1e-12)

    def test_consistent_system_exact(self, rng):
        A = rng.standard_normal((7, 3))
        x_true = np.array([1.5, -2.0, 0.25])
        np.testing.assert_allclose(solve(A, A @ x_true), x_true, atol=1e-12)

    def test_rank_deficient_minimum_norm(self, rank_deficient, rng):
        b = rng.standard_normal(10)
        A = rank_deficient.to_array()
        expected = _truncated_pinv(A) @ b
        np.testing.assert_allclose(solve(rank_deficient, b, eps=1e-10), expected, atol=1e-8)

    def test_column_vector_b(self):
        x = solve([[1, 2], [3, 4]], [[1], [1]])
        np.testing.assert_allclose(x, [-1.0, 1.0], atol=1e-12)

    def test_wide_matrix_rejected(self):
        with pytest.raises(DimensionError, match="m < n"):
            solve(matrix(np.ones(6), 3), [1.0, 1.0])

    def test_b_length_mismatch(self):
        with pytest.raises(DimensionError, match="expected length 2") as exc_info:
            solve([[1, 2], [3, 4]], [1.0, 2.0, 3.0])
        assert exc_info.value.expected == 2
        assert exc_info.value.actual == 3

    def test_b_not_finite(self):
        with pytest.raises(ValidationError):
            solve([[1, 2], [3, 4]], [1.0, np.nan])

    def test_b_2d_rejected(self):
        with pytest.raises(DimensionError):
            solve([[1, 2], [3, 4]], [[1.0, 2.0], [3.0, 4.0]])

    def test_inputs_not_modified(self, tall_random, rng):
        b = rng.standard_normal(12)
        A_before = tall_random.data.copy()
        b_before = b.copy()
        solve(tall_random, b)
        np.testing.assert_array_equal(tall_random.data, A_before)
        np.testing.assert_array_equal(b, b_before)


# ═══════════════════════════════════════════════════════════════════════
# lstsq
# ═══════════════════════════════════════════════════════════════════════


class TestLstsq:

    def test_solution_type(self, tall_random, rng):
        sol = lstsq(tall_random, rng.standard_normal(12))
        assert isinstance(sol, LeastSquaresSolution)
        assert sol.backend_name == 'cpu_pinv'
        assert sol.info['svd_backend'] == 'cpu_golub_reinsch'

    def test_residuals(self, tall_random, rng):
        b = rng.standard_normal(12)
        sol = lstsq(tall_random, b)
        A = tall_random.to_array()
        np.testing.assert_allclose(sol.fitted_values, A @ sol.x, atol=1e-12)
        np.testing.assert_allclose(sol.residuals, b - A @ sol.x, atol=1e-12)
        assert sol.rss == pytest.approx(float(sol.residuals @ sol.residuals))

    def test_residuals_orthogonal_to_columns(self, tall_random, rng):
        sol = lstsq(tall_random, rng.standard_normal(12))
        np.testing.assert_allclose(tall_random.to_array().T @ sol.residuals, 0.0, atol=1e-10)

    def test_rss_matches_numpy(self, rng):
        A = rng.standard_normal((15, 3))
        b = rng.standard_normal(15)
        _, rss, _, _ = np.linalg.lstsq(A, b, rcond=None)
        assert lstsq(A, b).rss == pytest.approx(float(rss[0]))

    def test_full_rank(self, tall_random, rng):
        sol = lstsq(tall_random, rng.standard_normal(12))
        assert sol.rank == 5
        assert not sol.is_rank_deficient
        assert sol.converged

    def test_rank_deficient(self):
        A = np.diag([3.0, 2.0, 0.0])
        sol = lstsq(A, [3.0, 4.0, 5.0])
        assert sol.rank == 2
        assert sol.is_rank_deficient
        np.testing.assert_allclose(sol.x, [1.0, 2.0, 0.0], atol=1e-14)
        assert sol.rss == pytest.approx(25.0)

    def test_timing_sections(self, tall_random, rng):
        timing = lstsq(tall_random, rng.standard_normal(12)).timing
        assert {'total_seconds', 'decomposition', 'solve', 'residuals'} <= set(timing)

    def test_summary_and_repr(self):
        sol = lstsq([[1, 2], [3, 4]], [1, 1])
        text = sol.summary()
        assert "Least Squares Solution" in text
        assert "Unknowns: 2" in text
        assert "Backend: cpu_pinv" in text
        assert repr(sol).startswith("LeastSquaresSolution(m=2, n=2, rank=2")

    def test_eps_forwarded(self, tall_random, rng):
        sol = lstsq(tall_random, rng.standard_normal(12), eps=1e-10)
        assert sol._design.metadata['eps'] == 1e-10


# ═══════════════════════════════════════════════════════════════════════
# Backend internals
# ═══════════════════════════════════════════════════════════════════════


class TestPseudoInverseBackend:

    def test_pseudo_inverse_diagonal(self):
        qi = pseudo_inverse_diagonal(np.array([2.0, 0.0, 0.5]))
        np.testing.assert_array_equal(qi, [0.5, 0.0, 2.0])

    def test_design_validates_a_first(self):
        # wide A with a mismatched b fails on A
        with pytest.raises(DimensionError, match="m < n"):
            LeastSquaresDesign.build(np.ones((2, 3)), [1.0])

    def test_strict_convergence_propagates(self, rng):
        design = LeastSquaresDesign.build(rng.standard_normal((8, 5)), rng.standard_normal(8))
        strict = LeastSquaresDesign(
            svd=SVDDesign(
                matrix=design.svd.matrix,
                eps=design.svd.eps,
                tol=design.svd.tol,
                max_iterations=1,
                strict=True,
            ),
            b=design.b,
        )
        with pytest.raises(ConvergenceError):
            PseudoInverseBackend().solve(strict)

    def test_warnings_propagate(self, rng):
        design = LeastSquaresDesign.build(rng.standard_normal((8, 5)), rng.standard_normal(8))
        capped = LeastSquaresDesign(
            svd=SVDDesign(
                matrix=design.svd.matrix,
                eps=design.svd.eps,
                tol=design.svd.tol,
                max_iterations=1,
            ),
            b=design.b,
        )
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", RuntimeWarning)
            result = PseudoInverseBackend().solve(capped)
        assert not result.params.converged
        assert result.has_warning("did not converge")


# ═══════════════════════════════════════════════════════════════════════
# pseudo_inverse
# ═══════════════════════════════════════════════════════════════════════


class TestPseudoInverse:

    def test_square_is_inverse(self):
        pinv = pseudo_inverse(matrix([1, 2, 3, 4], 2))
        np.testing.assert_allclose(pinv.to_array(), [[-2.0, 1.0], [1.5, -0.5]], atol=1e-12)

    def test_shape(self, tall_random):
        assert pseudo_inverse(tall_random).shape == (5, 12)

    def test_matches_numpy(self, rank_deficient):
        pinv = pseudo_inverse(rank_deficient, eps=1e-10)
        np.testing.assert_allclose(
            pinv.to_array(), _truncated_pinv(rank_deficient.to_array()), atol=1e-8
        )

    def test_penrose_conditions(self, tall_random):
        A = tall_random.to_array()
        P = pseudo_inverse(tall_random).to_array()
        np.testing.assert_allclose(A @ P @ A, A, atol=1e-10)
        np.testing.assert_allclose(P @ A @ P, P, atol=1e-10)

    def test_returns_matrix(self):
        assert isinstance(pseudo_inverse(np.eye(2)), Matrix)


# ═══════════════════════════════════════════════════════════════════════
# Non-convergence through the public entry points
# ═══════════════════════════════════════════════════════════════════════


class TestConvergence:

    def test_lstsq_warning_points_at_caller(self, rng):
        A = rng.standard_normal((8, 5))
        b = rng.standard_normal(8)
        with pytest.warns(RuntimeWarning, match="did not converge") as record:
            sol = lstsq(A, b, max_iterations=1)
        assert record[0].filename == __file__
        assert not sol.converged

    def test_solve_warning_points_at_caller(self, rng):
        A = rng.standard_normal((8, 5))
        b = rng.standard_normal(8)
        with pytest.warns(RuntimeWarning, match="did not converge") as record:
            x = solve(A, b, max_iterations=1)
        assert record[0].filename == __file__
        assert x.shape == (5,)

    def test_pseudo_inverse_warning_points_at_caller(self, rng):
        A = rng.standard_normal((8, 5))
        with pytest.warns(RuntimeWarning, match="did not converge") as record:
            pinv = pseudo_inverse(A, max_iterations=1)
        assert record[0].filename == __file__
        assert pinv.shape == (5, 8)

    @pytest.mark.parametrize("entry", [lstsq, solve])
    def test_strict_raises(self, rng, entry):
        A = rng.standard_normal((8, 5))
        with pytest.raises(ConvergenceError):
            entry(A, rng.standard_normal(8), max_iterations=1, strict=True)

    def test_pseudo_inverse_strict_raises(self, rng):
        with pytest.raises(ConvergenceError):
            pseudo_inverse(rng.standard_normal((8, 5)), max_iterations=1, strict=True)

    def test_build_forwards_engine_parameters(self, rng):
        design = LeastSquaresDesign.build(
            rng.standard_normal((4, 2)), rng.standard_normal(4),
            max_iterations=7, strict=True,
        )
        assert design.svd.max_iterations == 7
        assert design.svd.strict

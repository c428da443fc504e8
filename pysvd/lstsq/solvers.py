"""
Solver dispatch for least squares.

Public API:
    solve()          - minimum-norm solution vector of min ||A x - b||_2
    lstsq()          - the same solve with residuals and diagnostics
    pseudo_inverse() - Moore-Penrose pseudo-inverse of A

Each entry point calls its backend directly, so a convergence warning
points at the caller's line.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pysvd.core.compute.precision import MAX_QR_ITERATIONS
from pysvd.linalg.matrix import Matrix, diagonal_multiply, multiply, transpose
from pysvd.lstsq.backends.cpu import PseudoInverseBackend, pseudo_inverse_diagonal
from pysvd.lstsq.design import LeastSquaresDesign
from pysvd.lstsq.solution import LeastSquaresSolution
from pysvd.svd.backends.cpu import GolubReinschBackend
from pysvd.svd.design import SVDDesign


def lstsq(
    A: Matrix | ArrayLike,
    b: ArrayLike,
    *,
    eps: float | None = None,
    tol: float | None = None,
    max_iterations: int = MAX_QR_ITERATIONS,
    strict: bool = False,
) -> LeastSquaresSolution:
    """
    Solve min ||A x - b||_2 through the SVD pseudo-inverse.

    Singular values that are exactly zero after the decomposition's
    clamping step are dropped, so rank-deficient A yields the
    minimum-norm solution.

    Args:
        A: m x n matrix with m >= n
        b: Right-hand side, length m
        eps: Relative precision of the decomposition (see decompose())
        tol: Householder skip threshold of the decomposition (see decompose())
        max_iterations: QR sweeps allowed per singular value
        strict: If True, raise ConvergenceError instead of warning when the
            decomposition does not converge

    Returns:
        LeastSquaresSolution with x, residuals, rss, rank and summary()

    Raises:
        DimensionError: If A has fewer rows than columns, or len(b) != m
        ValidationError: If inputs are non-numeric or not finite
        ConvergenceError: If strict and the decomposition did not converge

    Example:
        >>> from pysvd.lstsq import lstsq
        >>> sol = lstsq([[1, 2], [3, 4]], [1, 1])
        >>> sol.x
    """
    design = LeastSquaresDesign.build(
        A, b, eps=eps, tol=tol, max_iterations=max_iterations, strict=strict,
    )
    result = PseudoInverseBackend().solve(design)
    return LeastSquaresSolution(_result=result, _design=design)


def solve(
    A: Matrix | ArrayLike,
    b: ArrayLike,
    *,
    eps: float | None = None,
    tol: float | None = None,
    max_iterations: int = MAX_QR_ITERATIONS,
    strict: bool = False,
) -> NDArray[np.float64]:
    """
    Vector x of length n minimizing ||A x - b||_2.

    Fails exactly when decompose(A) fails (m < n), or when len(b) != m.
    Keyword arguments are as for lstsq().
    """
    design = LeastSquaresDesign.build(
        A, b, eps=eps, tol=tol, max_iterations=max_iterations, strict=strict,
    )
    return PseudoInverseBackend().solve(design).params.x


def pseudo_inverse(
    A: Matrix | ArrayLike,
    *,
    eps: float | None = None,
    tol: float | None = None,
    max_iterations: int = MAX_QR_ITERATIONS,
    strict: bool = False,
) -> Matrix:
    """
    Pseudo-inverse V diag(q+) U' of A, an n x m Matrix.

    Raises:
        DimensionError: If A has fewer rows than columns
        ConvergenceError: If strict and the decomposition did not converge
    """
    design = SVDDesign.build(A, eps=eps, tol=tol, max_iterations=max_iterations, strict=strict)
    params = GolubReinschBackend().solve(design).params
    qi = pseudo_inverse_diagonal(params.q)
    return multiply(params.v, diagonal_multiply(qi, transpose(params.u)))

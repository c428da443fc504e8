"""
Solver dispatch for singular value decomposition.

This module provides the decompose() function (public API) and backend
selection.
"""

from __future__ import annotations

from typing import Literal

from numpy.typing import ArrayLike

from pysvd.core.compute.precision import MAX_QR_ITERATIONS
from pysvd.linalg.matrix import Matrix
from pysvd.svd.backends.cpu import GolubReinschBackend, LapackBackend
from pysvd.svd.design import SVDDesign
from pysvd.svd.solution import SVDSolution


BackendChoice = Literal['auto', 'cpu', 'cpu_golub_reinsch', 'cpu_lapack']


def decompose(
    A: Matrix | ArrayLike,
    eps: float | None = None,
    tol: float | None = None,
    *,
    backend: BackendChoice = 'auto',
    max_iterations: int = MAX_QR_ITERATIONS,
    strict: bool = False,
) -> SVDSolution:
    """
    Singular value decomposition A = u diag(q) v'.

    Args:
        A: m x n matrix with m >= n; a Matrix or any 2-D array-like.
            The input buffer is never modified.
        eps: Relative precision. Default (None or 0): float64 machine epsilon (2**-52).
            Values below eps * max_i(|q_i| + |e_i|) are treated as zero.
        tol: Squared column/row norms below tol skip their Householder
            reflection. Default (None or 0): 1e-64 / eps.
        backend: Computational backend to use:
            - 'auto' / 'cpu' / 'cpu_golub_reinsch': Golub-Reinsch reference
            - 'cpu_lapack': LAPACK through SciPy, sorted output
        max_iterations: QR sweeps allowed per singular value. Default 50.
        strict: If True, raise ConvergenceError when a singular value does
            not converge. If False (default), accept the current value,
            set solution.converged = False and issue a RuntimeWarning.

    Returns:
        SVDSolution with q (n,), u (m x n) and v (n x n). Singular values are
        non-negative but not sorted; use solution.sorted() for descending order.

    Raises:
        DimensionError: If A has fewer rows than columns
        ValidationError: If A is non-numeric or not finite
        ConvergenceError: If strict and the diagonalization did not converge

    Example:
        >>> from pysvd import decompose
        >>> sol = decompose([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]])
        >>> sol.q
        >>> sol.reconstruct()
    """
    design = SVDDesign.build(A, eps=eps, tol=tol, max_iterations=max_iterations, strict=strict)
    backend_impl = _get_backend(backend)
    result = backend_impl.solve(design)
    return SVDSolution(_result=result, _design=design)


def _get_backend(choice: BackendChoice):
    """
    Instantiate the requested backend.

    Raises:
        ValueError: If unknown backend specified
    """
    if choice in ('auto', 'cpu', 'cpu_golub_reinsch'):
        return GolubReinschBackend()
    elif choice == 'cpu_lapack':
        return LapackBackend()
    else:
        raise ValueError(f"Unknown backend: {choice!r}")

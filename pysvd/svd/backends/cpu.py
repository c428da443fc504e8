"""
CPU backends for singular value decomposition.

GolubReinschBackend is the reference implementation: the classic
Householder bidiagonalization plus implicit-shift QR iteration, written
against the strided BLAS kernels. LapackBackend delegates to LAPACK (via
SciPy) and exists for cross-checking.
"""

from __future__ import annotations

import warnings
from typing import Any

import numpy as np
import scipy.linalg

from pysvd.core.exceptions import ConvergenceError
from pysvd.core.result import Result
from pysvd.core.compute.timing import Timer
from pysvd.linalg.matrix import Matrix
from pysvd.svd._golub_reinsch import (
    accumulate_left,
    accumulate_right,
    bidiagonalize,
    diagonalize,
)
from pysvd.svd.design import SVDDesign
from pysvd.svd.solution import SVDParams


class GolubReinschBackend:
    """
    CPU backend using the Golub-Reinsch algorithm.

    Implements the Backend protocol for SVDDesign -> SVDParams.

    The caller's buffer is cloned on entry; the clone is reduced in place
    and becomes U.

    Args:
        stacklevel: Frames between solve() and the user call site, passed
            to warnings.warn. The default fits decompose(); entry points
            that reach the backend through more frames raise it.
    """

    def __init__(self, stacklevel: int = 3) -> None:
        self._stacklevel = stacklevel

    @property
    def name(self) -> str:
        return 'cpu_golub_reinsch'

    def solve(self, design: SVDDesign) -> Result[SVDParams]:
        """
        Decompose design.matrix.

        Raises:
            ConvergenceError: If design.strict and a singular value did not
                converge within design.max_iterations sweeps
        """
        timer = Timer()
        timer.start()

        m, n = design.m, design.n
        u = design.matrix.data.copy()
        v = np.zeros(n * n, dtype=np.float64)

        with timer.section('bidiagonalization'):
            bidiagonal = bidiagonalize(u, m, n, design.tol)

        with timer.section('accumulate_right'):
            accumulate_right(u, v, bidiagonal, n)

        with timer.section('accumulate_left'):
            accumulate_left(u, bidiagonal.q, m, n)

        with timer.section('diagonalization'):
            diag = diagonalize(
                u, v, bidiagonal.q, bidiagonal.e, m, n,
                threshold=design.eps * bidiagonal.max_norm,
                max_iterations=design.max_iterations,
            )

        timer.stop()

        messages: tuple[str, ...] = ()
        converged = not diag.non_converged
        if not converged:
            message = (
                f"Singular values at indices {list(diag.non_converged)} did not converge "
                f"after {design.max_iterations} QR iterations; accepting current values"
            )
            if design.strict:
                raise ConvergenceError(
                    message,
                    iterations=design.max_iterations,
                    reason='max_iterations',
                    threshold=diag.threshold,
                    indices=diag.non_converged,
                )
            warnings.warn(message, RuntimeWarning, stacklevel=self._stacklevel)
            messages = (message,)

        params = SVDParams(
            q=bidiagonal.q,
            u=Matrix(data=u, cols=n),
            v=Matrix(data=v, cols=n),
            converged=converged,
            iterations=diag.iterations,
        )

        info: dict[str, Any] = {
            'method': 'golub_reinsch',
            'converged': converged,
            'non_converged': list(diag.non_converged),
            'iterations': sum(diag.iterations),
            'eps': design.eps,
            'tol': design.tol,
            'threshold': diag.threshold,
            'max_norm': bidiagonal.max_norm,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=messages,
        )


class LapackBackend:
    """
    CPU backend delegating to LAPACK's gesdd through scipy.linalg.svd.

    Produces the same payload shapes as GolubReinschBackend, with singular
    values sorted descending. Values below eps * max(q) are clamped to zero.
    """

    @property
    def name(self) -> str:
        return 'cpu_lapack'

    def solve(self, design: SVDDesign) -> Result[SVDParams]:
        timer = Timer()
        timer.start()

        with timer.section('lapack_svd'):
            U, s, Vt = scipy.linalg.svd(design.matrix.to_array(), full_matrices=False)

        threshold = design.eps * (float(s[0]) if len(s) else 0.0)
        q = np.where(s < threshold, 0.0, s)

        timer.stop()

        params = SVDParams(
            q=q,
            u=Matrix.from_array(U),
            v=Matrix.from_array(Vt.T),
            converged=True,
            iterations=(0,) * design.n,
        )

        info: dict[str, Any] = {
            'method': 'lapack',
            'converged': True,
            'non_converged': [],
            'eps': design.eps,
            'threshold': threshold,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=(),
        )

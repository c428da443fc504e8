"""
CPU backend for least squares via the SVD pseudo-inverse.

With A = U diag(q) V', the normal equations A'A x = A'b become
V diag(q)^2 V' x = V diag(q) U'b, i.e. diag(q) V' x = U'b. The
minimum-norm solution is therefore

    x = V diag(q+) (b'U)'

where q+ inverts the positive singular values and zeroes the rest.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pysvd.core.result import Result
from pysvd.core.compute.timing import Timer
from pysvd.linalg.matrix import matrix, multiply
from pysvd.linalg.operators import make_diagonal
from pysvd.lstsq.design import LeastSquaresDesign
from pysvd.lstsq.solution import LeastSquaresParams
from pysvd.svd.backends.cpu import GolubReinschBackend


def pseudo_inverse_diagonal(q: NDArray[np.float64]) -> NDArray[np.float64]:
    """1/q_i where q_i > 0, else 0."""
    qi = np.zeros_like(q)
    np.divide(1.0, q, out=qi, where=q > 0)
    return qi


class PseudoInverseBackend:
    """
    CPU backend solving min ||A x - b||_2 through the Golub-Reinsch SVD.

    Implements the Backend protocol for LeastSquaresDesign -> LeastSquaresParams.

    Args:
        stacklevel: Frames between solve() and the user call site. The
            decomposition it runs warns one frame further out.
    """

    def __init__(self, stacklevel: int = 3) -> None:
        self._stacklevel = stacklevel

    @property
    def name(self) -> str:
        return 'cpu_pinv'

    def solve(self, design: LeastSquaresDesign) -> Result[LeastSquaresParams]:
        """
        Raises:
            ConvergenceError: Propagated from the decomposition (strict designs only)
        """
        timer = Timer()
        timer.start()

        with timer.section('decomposition'):
            svd_result = GolubReinschBackend(stacklevel=self._stacklevel + 1).solve(design.svd)
        q, u, v = svd_result.params.q, svd_result.params.u, svd_result.params.v

        with timer.section('solve'):
            b = design.b
            btu = multiply(matrix(b, len(b)), u)
            z = btu.data.copy()
            make_diagonal(pseudo_inverse_diagonal(q)).update(z)
            x = multiply(v, matrix(z, 1)).data

        with timer.section('residuals'):
            fitted_values = multiply(design.A, matrix(x, 1)).data
            residuals = b - fitted_values
            rss = float(residuals @ residuals)

        timer.stop()

        rank = int(np.count_nonzero(q > 0))
        params = LeastSquaresParams(
            x=x,
            residuals=residuals,
            fitted_values=fitted_values,
            rss=rss,
            rank=rank,
            singular_values=q,
            converged=svd_result.params.converged,
        )

        info: dict[str, Any] = {
            'method': 'svd_pseudo_inverse',
            'rank': rank,
            'converged': svd_result.params.converged,
            'svd_backend': svd_result.backend_name,
            'svd_timing': svd_result.timing,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=svd_result.warnings,
        )

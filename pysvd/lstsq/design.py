"""
Least-squares design.

Wraps the decomposition design of A together with the right-hand side b
of min ||A x - b||_2.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pysvd.core.compute.precision import MAX_QR_ITERATIONS
from pysvd.core.exceptions import DimensionError
from pysvd.core.validation import check_1d, check_array, check_finite
from pysvd.linalg.matrix import Matrix
from pysvd.svd.design import SVDDesign


@dataclass(frozen=True)
class LeastSquaresDesign:
    """
    Validated least-squares problem.

    Construction:
        LeastSquaresDesign.build(A, b)
    """
    svd: SVDDesign
    b: NDArray[np.float64]

    @classmethod
    def build(
        cls,
        A: Matrix | ArrayLike,
        b: ArrayLike,
        *,
        eps: float | None = None,
        tol: float | None = None,
        max_iterations: int = MAX_QR_ITERATIONS,
        strict: bool = False,
    ) -> LeastSquaresDesign:
        """
        Validate A and b.

        A is validated first, so an A with fewer rows than columns fails
        exactly as decompose() does.

        Raises:
            DimensionError: If A has fewer rows than columns, or len(b) != rows of A
            ValidationError: If A or b are non-numeric or not finite
            ValueError: If eps, tol or max_iterations are out of range
        """
        svd_design = SVDDesign.build(
            A, eps=eps, tol=tol, max_iterations=max_iterations, strict=strict,
        )

        b_arr = check_array(b, 'b')
        if b_arr.ndim == 2 and b_arr.shape[1] == 1:
            b_arr = b_arr.ravel()
        check_1d(b_arr, 'b')
        check_finite(b_arr, 'b')

        if len(b_arr) != svd_design.m:
            raise DimensionError(
                f"b: expected length {svd_design.m} to match rows of A, got {len(b_arr)}",
                expected=svd_design.m,
                actual=len(b_arr),
            )

        return cls(svd=svd_design, b=np.array(b_arr, dtype=np.float64))

    @property
    def A(self) -> Matrix:
        return self.svd.matrix

    @property
    def m(self) -> int:
        """Number of equations."""
        return self.svd.m

    @property
    def n(self) -> int:
        """Number of unknowns."""
        return self.svd.n

    @property
    def metadata(self) -> dict[str, Any]:
        return {'m': self.m, 'n': self.n, 'eps': self.svd.eps, 'tol': self.svd.tol}

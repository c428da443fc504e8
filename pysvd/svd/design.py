"""
Decomposition design.

SVDDesign holds a validated input matrix together with the engine
parameters (eps, tol, iteration cap, strictness). It is the single place
where input shapes are checked; backends trust it.
"""

from __future__ import annotations

from dataclasses import dataclass

from numpy.typing import ArrayLike

from pysvd.core.compute.precision import MAX_QR_ITERATIONS, resolve_eps_tol
from pysvd.core.validation import check_2d, check_array, check_finite, check_tall
from pysvd.linalg.matrix import Matrix


@dataclass(frozen=True)
class SVDDesign:
    """
    Validated decomposition request.

    Construction:
        SVDDesign.build(A)                    # defaults: eps = 2**-52, tol = 1e-64/eps
        SVDDesign.build(A, eps=1e-12)         # tol follows eps
        SVDDesign.build(A, strict=True)       # raise on non-convergence
    """
    matrix: Matrix
    eps: float
    tol: float
    max_iterations: int = MAX_QR_ITERATIONS
    strict: bool = False

    @classmethod
    def build(
        cls,
        A: Matrix | ArrayLike,
        *,
        eps: float | None = None,
        tol: float | None = None,
        max_iterations: int = MAX_QR_ITERATIONS,
        strict: bool = False,
    ) -> SVDDesign:
        """
        Validate A and resolve engine parameters.

        Raises:
            DimensionError: If A is not 2D or has fewer rows than columns
            ValidationError: If A is non-numeric or contains NaN/Inf
        """
        if isinstance(A, Matrix):
            check_finite(A.data, 'A')
            mat = A
        else:
            arr = check_array(A, 'A')
            check_2d(arr, 'A')
            check_finite(arr, 'A')
            mat = Matrix.from_array(arr)

        check_tall(mat.rows, mat.cols, 'A')

        if max_iterations < 1:
            raise ValueError(f"max_iterations must be at least 1, got {max_iterations}")

        eps, tol = resolve_eps_tol(eps, tol)
        return cls(matrix=mat, eps=eps, tol=tol, max_iterations=max_iterations, strict=strict)

    @property
    def m(self) -> int:
        """Number of rows."""
        return self.matrix.rows

    @property
    def n(self) -> int:
        """Number of columns."""
        return self.matrix.cols

"""
Minimum-norm least squares built on the singular value decomposition.

Public API:
    solve(A, b) -> ndarray
    lstsq(A, b) -> LeastSquaresSolution
    pseudo_inverse(A) -> Matrix
"""

from pysvd.lstsq.design import LeastSquaresDesign
from pysvd.lstsq.solution import LeastSquaresSolution, LeastSquaresParams
from pysvd.lstsq.solvers import lstsq, pseudo_inverse, solve

__all__ = [
    "solve",
    "lstsq",
    "pseudo_inverse",
    "LeastSquaresDesign",
    "LeastSquaresSolution",
    "LeastSquaresParams",
]

"""
Singular value decomposition.

Public API:
    decompose(A, eps=None, tol=None, ...) -> SVDSolution

Example:
    >>> from pysvd.svd import decompose
    >>> sol = decompose(A)
    >>> sol.q, sol.u, sol.v
    >>> print(sol.sorted().summary())
"""

from pysvd.svd.design import SVDDesign
from pysvd.svd.solution import SVDSolution, SVDParams
from pysvd.svd.solvers import decompose

__all__ = [
    "decompose",
    "SVDDesign",
    "SVDSolution",
    "SVDParams",
]

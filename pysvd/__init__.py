"""
PySVD: dense singular value decomposition and minimum-norm least squares.

A Golub-Reinsch SVD engine over row-major float64 matrices, the strided
BLAS kernels and linear-operator abstractions it is built from, and a
least-squares solver on top of the decomposition.

Submodules:
    linalg: Kernels, Matrix, strided vectors, linear operators
    svd: decompose()
    lstsq: solve(), lstsq(), pseudo_inverse()
"""

__version__ = "0.1.0"

from pysvd.core.exceptions import (
    PySVDError,
    ValidationError,
    DimensionError,
    NumericalError,
    ConvergenceError,
)
from pysvd.linalg.matrix import Matrix, matrix
from pysvd.svd import decompose, SVDSolution
from pysvd.lstsq import solve, lstsq, pseudo_inverse, LeastSquaresSolution

__all__ = [
    "__version__",
    "Matrix",
    "matrix",
    "decompose",
    "SVDSolution",
    "solve",
    "lstsq",
    "pseudo_inverse",
    "LeastSquaresSolution",
    "PySVDError",
    "ValidationError",
    "DimensionError",
    "NumericalError",
    "ConvergenceError",
]

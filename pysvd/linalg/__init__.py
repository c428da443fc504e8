"""
Dense linear algebra building blocks.

Submodules:
    blas: strided dot / axpy kernels
    matrix: row-major Matrix and its products
    vector: zero-copy strided row/column views
    operators: dense, diagonal and Householder linear maps
"""

from pysvd.linalg.blas import axpy, dot
from pysvd.linalg.matrix import (
    Matrix,
    col_col_dot,
    debug_string,
    diagonal_multiply,
    identity,
    matrix,
    multiply,
    row_col_dot,
    row_row_dot,
    transpose,
)
from pysvd.linalg.vector import StridedVector, columns, rows, vector_from_array
from pysvd.linalg.operators import (
    DenseMap,
    DiagonalOperator,
    HouseholderReflection,
    LinearMapVariant,
    apply,
    linear_map_from_matrix,
    linear_map_from_operator,
    linear_map_from_rows,
    make_diagonal,
    make_householder_reflection,
    to_dense,
)

__all__ = [
    # Kernels
    "dot",
    "axpy",
    # Matrix
    "Matrix",
    "matrix",
    "identity",
    "multiply",
    "transpose",
    "diagonal_multiply",
    "row_col_dot",
    "col_col_dot",
    "row_row_dot",
    "debug_string",
    # Vectors
    "StridedVector",
    "rows",
    "columns",
    "vector_from_array",
    # Operators
    "DenseMap",
    "DiagonalOperator",
    "HouseholderReflection",
    "LinearMapVariant",
    "apply",
    "linear_map_from_matrix",
    "linear_map_from_rows",
    "linear_map_from_operator",
    "make_diagonal",
    "make_householder_reflection",
    "to_dense",
]

"""
Row-major float64 matrices.

A Matrix is a flat float64 buffer plus a column count; the row count is
derived as len(data) // cols. Operations that transform a matrix
(transpose, multiply, diagonal_multiply) allocate a new buffer.

The row/column dot products address the flat buffer with strides, so
callers (most importantly the decomposition engine) never materialize
row or column copies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pysvd.core.exceptions import DimensionError
from pysvd.core.validation import check_array
from pysvd.linalg.blas import dot


@dataclass(frozen=True, eq=False)
class Matrix:
    """
    Flat row-major float64 buffer tagged with a column count.

    Construct via matrix(), Matrix.from_array() or Matrix.from_rows().

    Attributes:
        data: 1-D contiguous float64 buffer, row-major
        cols: Column count; len(data) is an exact multiple of it
    """
    data: NDArray[np.float64]
    cols: int

    def __post_init__(self) -> None:
        data = check_array(self.data, 'Matrix data')
        if data.ndim != 1:
            raise DimensionError(
                f"Matrix buffer must be 1D, got shape {data.shape}",
                expected=1,
                actual=data.ndim,
            )
        object.__setattr__(self, 'data', np.ascontiguousarray(data))
        if self.cols <= 0:
            raise DimensionError(f"Matrix column count must be positive, got {self.cols}")
        if len(self.data) % self.cols != 0:
            raise DimensionError(
                f"Buffer length {len(self.data)} is not a multiple of column count {self.cols}",
                actual=len(self.data),
            )

    @classmethod
    def from_array(cls, array: ArrayLike) -> Matrix:
        """Copy a 2-D array-like into a new Matrix."""
        arr = np.array(array, dtype=np.float64)
        if arr.ndim != 2:
            raise DimensionError(
                f"Expected 2D array, got {arr.ndim}D with shape {arr.shape}",
                expected=2,
                actual=arr.ndim,
            )
        return cls(data=arr.reshape(-1), cols=arr.shape[1])

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> Matrix:
        """Build a Matrix from a sequence of equal-length rows."""
        return cls.from_array([list(row) for row in rows])

    @property
    def rows(self) -> int:
        """Number of rows."""
        return len(self.data) // self.cols

    @property
    def shape(self) -> tuple[int, int]:
        return (self.rows, self.cols)

    def to_array(self) -> NDArray[np.float64]:
        """(rows, cols) view of the buffer. Writes go through to the matrix."""
        return self.data.reshape(self.rows, self.cols)

    def copy(self) -> Matrix:
        """Matrix with an independent copy of the buffer."""
        return Matrix(data=self.data.copy(), cols=self.cols)

    def __getitem__(self, index: tuple[int, int]) -> float:
        i, j = index
        return float(self.data[i * self.cols + j])

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.cols == other.cols and np.array_equal(self.data, other.data)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Matrix(rows={self.rows}, cols={self.cols})"

    def __str__(self) -> str:
        return debug_string(self)


def matrix(buffer: ArrayLike, cols: int) -> Matrix:
    """
    Tag a flat row-major buffer with a column count.

    A 1-D float64 ndarray is wrapped without copying; anything else is
    converted first.
    """
    data = np.ascontiguousarray(buffer, dtype=np.float64)
    if data.ndim != 1:
        data = data.reshape(-1)
    return Matrix(data=data, cols=int(cols))


def identity(n: int) -> Matrix:
    """n x n identity matrix."""
    return Matrix(data=np.eye(n, dtype=np.float64).reshape(-1), cols=n)


def row_col_dot(a: Matrix, i: int, b: Matrix, j: int) -> float:
    """Dot product of row i of a and column j of b."""
    return dot(a.cols, a.data, 1, i * a.cols, b.data, b.cols, j)


def col_col_dot(a: Matrix, i: int, b: Matrix, j: int) -> float:
    """Dot product of column i of a and column j of b."""
    return dot(a.rows, a.data, a.cols, i, b.data, b.cols, j)


def row_row_dot(a: Matrix, i: int, b: Matrix, j: int) -> float:
    """Dot product of row i of a and row j of b."""
    return dot(a.cols, a.data, 1, i * a.cols, b.data, 1, j * b.cols)


def multiply(a: Matrix, b: Matrix) -> Matrix:
    """
    Matrix product a @ b.

    Raises:
        DimensionError: If a's column count differs from b's row count
    """
    if a.cols != b.rows:
        raise DimensionError(
            f"Cannot multiply ({a.rows}, {a.cols}) by ({b.rows}, {b.cols}): "
            f"{a.cols} columns do not match {b.rows} rows",
            expected=a.cols,
            actual=b.rows,
        )
    m, p = a.rows, b.cols
    out = np.empty(m * p, dtype=np.float64)
    for i in range(m):
        for j in range(p):
            out[i * p + j] = row_col_dot(a, i, b, j)
    return Matrix(data=out, cols=p)


def transpose(a: Matrix) -> Matrix:
    """Transposed copy of a."""
    return Matrix(data=a.to_array().T.copy().reshape(-1), cols=a.rows)


def diagonal_multiply(diag: ArrayLike, b: Matrix) -> Matrix:
    """
    diag(d) @ b: scale row i of b by d[i].

    Raises:
        DimensionError: If len(d) differs from b's row count
    """
    d = np.asarray(diag, dtype=np.float64)
    if d.ndim != 1 or len(d) != b.rows:
        raise DimensionError(
            f"Diagonal of length {d.size} cannot scale a matrix with {b.rows} rows",
            expected=b.rows,
            actual=d.size,
        )
    return Matrix(data=(b.to_array() * d[:, np.newaxis]).reshape(-1), cols=b.cols)


def debug_string(a: Matrix) -> str:
    """Nested-list rendering, one row per line."""
    body = ",\n ".join(
        "[" + ", ".join(repr(float(v)) for v in a.data[i * a.cols:(i + 1) * a.cols]) + "]"
        for i in range(a.rows)
    )
    return f"[{body}]\n"

"""
Linear maps and square linear operators.

Three variants share one capability set (dimensions, structural
iteration over nonzero cells, transpose):

    DenseMap              - any matrix, or a wrapped cell source
    DiagonalOperator      - diag(d), square, its own transpose
    HouseholderReflection - I - 2 v v' acting on a trailing block,
                            square, its own transpose

The two square variants also update a vector in place. A reflection
costs one dot product and one axpy per update instead of a dense
matrix-vector product, which is the reason to keep it in this form.

Transposing a DenseMap is O(1): the transposed map reuses the same
cell source with row and column indices swapped.
"""

from __future__ import annotations

from typing import Callable, Sequence, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pysvd.core.exceptions import DimensionError
from pysvd.core.protocols import CellSink
from pysvd.linalg.blas import axpy, dot
from pysvd.linalg.matrix import Matrix
from pysvd.linalg.vector import StridedVector

CellSource = Callable[[CellSink], None]


def _swapped(source: CellSource) -> CellSource:
    def foreach_transposed(sink: CellSink) -> None:
        source(lambda c_ij, i, j: sink(c_ij, j, i))
    return foreach_transposed


class DenseMap:
    """
    Linear map backed by a cell source.

    Build with linear_map_from_matrix(), linear_map_from_rows() or
    linear_map_from_operator().
    """

    __slots__ = ('input_dimension', 'output_dimension', '_source', '_transposed')

    def __init__(
        self,
        input_dimension: int,
        output_dimension: int,
        source: CellSource,
        transposed: DenseMap | None = None,
    ) -> None:
        self.input_dimension = input_dimension
        self.output_dimension = output_dimension
        self._source = source
        self._transposed = transposed

    def foreach2d(self, sink: CellSink) -> None:
        self._source(sink)

    def transpose(self) -> DenseMap:
        if self._transposed is None:
            self._transposed = DenseMap(
                self.output_dimension,
                self.input_dimension,
                _swapped(self._source),
                transposed=self,
            )
        return self._transposed

    def __repr__(self) -> str:
        return f"DenseMap({self.output_dimension} x {self.input_dimension})"


class DiagonalOperator:
    """diag(d). Visits only the n diagonal cells."""

    __slots__ = ('diagonal',)

    def __init__(self, diagonal: NDArray[np.float64]) -> None:
        self.diagonal = diagonal

    @property
    def dimension(self) -> int:
        return len(self.diagonal)

    @property
    def input_dimension(self) -> int:
        return len(self.diagonal)

    @property
    def output_dimension(self) -> int:
        return len(self.diagonal)

    def update(self, x: NDArray[np.float64]) -> None:
        """x[i] *= d[i] for every i."""
        if len(x) != len(self.diagonal):
            raise DimensionError(
                f"Diagonal operator of dimension {len(self.diagonal)} "
                f"cannot update a vector of length {len(x)}",
                expected=len(self.diagonal),
                actual=len(x),
            )
        x *= self.diagonal

    def foreach2d(self, sink: CellSink) -> None:
        for i, c_ii in enumerate(self.diagonal):
            sink(float(c_ii), i, i)

    def transpose(self) -> DiagonalOperator:
        return self

    def __repr__(self) -> str:
        return f"DiagonalOperator(dimension={self.dimension})"


class HouseholderReflection:
    """
    Reflection R such that after R.update(column), column[i] == 0 for i > k.

    In matrix form R has a leading k x k identity block and a trailing
    block I - 2 v v', where v is the unit reflector built from column[k:].
    """

    __slots__ = ('dimension', 'k', 'v')

    def __init__(self, dimension: int, k: int, v: NDArray[np.float64]) -> None:
        self.dimension = dimension
        self.k = k
        self.v = v

    @property
    def input_dimension(self) -> int:
        return self.dimension

    @property
    def output_dimension(self) -> int:
        return self.dimension

    def update(self, x: NDArray[np.float64]) -> None:
        """x[k:] -= 2 (v'x[k:]) v"""
        n = len(self.v)
        vtx2 = 2.0 * dot(n, self.v, 1, 0, x, 1, self.k)
        axpy(n, -vtx2, self.v, 1, 0, x, 1, self.k)

    def foreach2d(self, sink: CellSink) -> None:
        k, v = self.k, self.v
        for i in range(k):
            sink(1.0, i, i)
        for i in range(len(v)):
            for j in range(len(v)):
                c_ij = -2.0 * v[i] * v[j]
                if i == j:
                    c_ij += 1.0
                sink(float(c_ij), k + i, k + j)

    def transpose(self) -> HouseholderReflection:
        return self

    def __repr__(self) -> str:
        return f"HouseholderReflection(dimension={self.dimension}, k={self.k})"


LinearMapVariant = Union[DenseMap, DiagonalOperator, HouseholderReflection]


def linear_map_from_matrix(a: Matrix) -> DenseMap:
    """Dense map visiting every cell of a."""
    data, m, n = a.data, a.rows, a.cols

    def foreach_cell(sink: CellSink) -> None:
        for i in range(m - 1, -1, -1):
            for j in range(n - 1, -1, -1):
                sink(float(data[n * i + j]), i, j)

    return DenseMap(n, m, foreach_cell)


def linear_map_from_rows(rows: Sequence[NDArray[np.float64]]) -> DenseMap:
    """Dense map whose i-th row is rows[i]."""
    row0_length = len(rows[0]) if len(rows) else 0

    def foreach_cell(sink: CellSink) -> None:
        for i, row in enumerate(rows):
            for j, c_ij in enumerate(row):
                sink(float(c_ij), i, j)

    return DenseMap(row0_length, len(rows), foreach_cell)


def linear_map_from_operator(op: DiagonalOperator | HouseholderReflection) -> DenseMap:
    """View a square operator through the linear-map capability set."""
    result = DenseMap(op.dimension, op.dimension, op.foreach2d)
    result._transposed = DenseMap(op.dimension, op.dimension, op.transpose().foreach2d, transposed=result)
    return result


def make_diagonal(d: ArrayLike) -> DiagonalOperator:
    return DiagonalOperator(np.asarray(d, dtype=np.float64))


def make_householder_reflection(column: ArrayLike, k: int) -> HouseholderReflection:
    """
    Reflection zeroing column[k+1:] when applied to column.

    The reflector is v = c + sign(c[0]) |c| e_0 normalized, with
    c = column[k:]. An all-zero c gives v = 0, i.e. the identity.
    """
    column = np.asarray(column, dtype=np.float64)
    v = column[k:].copy()
    c_norm = float(np.sqrt(dot(len(v), v, 1, 0, v, 1, 0)))
    if len(v) == 0 or c_norm == 0.0:
        return HouseholderReflection(len(column), k, np.zeros_like(v))
    v[0] += c_norm if v[0] > 0 else -c_norm
    v /= np.sqrt(dot(len(v), v, 1, 0, v, 1, 0))
    return HouseholderReflection(len(column), k, v)


def apply(m: LinearMapVariant, x: NDArray[np.float64] | StridedVector) -> NDArray[np.float64]:
    """y = M x, accumulated over the nonzero cells of M."""
    get = x.get if isinstance(x, StridedVector) else x.__getitem__
    y = np.zeros(m.output_dimension, dtype=np.float64)

    def accumulate(c_ij: float, i: int, j: int) -> None:
        y[i] += c_ij * get(j)

    m.foreach2d(accumulate)
    return y


def to_dense(m: LinearMapVariant) -> Matrix:
    """Materialize a linear map as a Matrix."""
    out = np.zeros((m.output_dimension, m.input_dimension), dtype=np.float64)

    def store(c_ij: float, i: int, j: int) -> None:
        out[i, j] = c_ij

    m.foreach2d(store)
    return Matrix(data=out.reshape(-1), cols=m.input_dimension)

"""
Strided vector views.

A StridedVector addresses `length` elements of a shared float64 buffer
starting at `offset`, `stride` elements apart. Rows and columns of a
Matrix are exposed this way without copying.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from pysvd.linalg.blas import dot
from pysvd.linalg.matrix import Matrix


@dataclass(frozen=True, eq=False)
class StridedVector:
    """View of every `stride`-th element of `data`, starting at `offset`."""
    data: NDArray[np.float64]
    length: int
    stride: int = 1
    offset: int = 0

    def __len__(self) -> int:
        return self.length

    def _index(self, k: int) -> int:
        if not 0 <= k < self.length:
            raise IndexError(f"index {k} out of range for vector of length {self.length}")
        return self.offset + k * self.stride

    def get(self, k: int) -> float:
        return float(self.data[self._index(k)])

    def set(self, k: int, value: float) -> None:
        self.data[self._index(k)] = value

    def subvector(self, offset: int) -> StridedVector:
        """Trailing part of the vector, starting at element `offset`."""
        return StridedVector(
            data=self.data,
            length=self.length - offset,
            stride=self.stride,
            offset=self.offset + offset * self.stride,
        )

    def to_array(self) -> NDArray[np.float64]:
        """numpy view of the addressed elements (shares memory)."""
        if self.length <= 0:
            return self.data[:0]
        return self.data[self.offset:self.offset + (self.length - 1) * self.stride + 1:self.stride]

    def dot(self, other: StridedVector) -> float:
        n = min(self.length, other.length)
        return dot(n, self.data, self.stride, self.offset, other.data, other.stride, other.offset)


def vector_from_array(buffer: NDArray[np.float64]) -> StridedVector:
    """Unit-stride view over a whole 1-D buffer."""
    return StridedVector(data=buffer, length=len(buffer))


def rows(a: Matrix) -> list[StridedVector]:
    """Zero-copy views of each row of a."""
    return [StridedVector(data=a.data, length=a.cols, stride=1, offset=i * a.cols) for i in range(a.rows)]


def columns(a: Matrix) -> list[StridedVector]:
    """Zero-copy views of each column of a."""
    return [StridedVector(data=a.data, length=a.rows, stride=a.cols, offset=j) for j in range(a.cols)]

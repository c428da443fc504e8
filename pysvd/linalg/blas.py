"""
Strided level-1 BLAS kernels.

Each vector operand is given as a base float64 buffer, a stride and an
offset, so rows and columns of a row-major matrix can be addressed without
copying them out. These are the innermost loops of the decomposition
engine and do no bounds checking: callers guarantee that

    offset + (n - 1) * stride < len(buffer)

The strided operands are turned into numpy views (no allocation of the
operand data) and handed to numpy's BLAS-backed dot product and vectorized
update. Unit strides give contiguous views, which is the fast path.
"""

import numpy as np
from numpy.typing import NDArray


def _strided(buffer: NDArray[np.float64], n: int, stride: int, offset: int) -> NDArray[np.float64]:
    return buffer[offset:offset + (n - 1) * stride + 1:stride]


def dot(
    n: int,
    x: NDArray[np.float64],
    stride_x: int,
    offset_x: int,
    y: NDArray[np.float64],
    stride_y: int,
    offset_y: int,
) -> float:
    """
    Dot product of two strided vectors.

    Returns:
        sum(x[offset_x + k*stride_x] * y[offset_y + k*stride_y] for k < n),
        or 0.0 when n <= 0.
    """
    if n <= 0:
        return 0.0
    return float(np.dot(_strided(x, n, stride_x, offset_x), _strided(y, n, stride_y, offset_y)))


def axpy(
    n: int,
    alpha: float,
    x: NDArray[np.float64],
    stride_x: int,
    offset_x: int,
    y: NDArray[np.float64],
    stride_y: int,
    offset_y: int,
) -> None:
    """
    In-place y += alpha * x over two strided vectors.

    x and y may share a buffer as long as the addressed elements do not
    overlap (e.g. two different columns of the same matrix).
    """
    if n <= 0:
        return
    yv = _strided(y, n, stride_y, offset_y)
    yv += alpha * _strided(x, n, stride_x, offset_x)

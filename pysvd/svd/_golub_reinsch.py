"""
Golub-Reinsch singular value decomposition.

Computes the singular values q and the orthonormal bases of a real m x n
matrix A (m >= n) such that

    A = U diag(q) V'
    U'U = I
    V'V = I

Based on the SVD procedure in "Singular Value Decomposition and Least
Squares Solutions" (G.H. Golub, C. Reinsch, Numer. Math. 14, 1970).

The algorithm runs in four phases on flat row-major buffers:

    1. Householder reduction of A to bidiagonal form (in a working copy)
    2. Accumulation of the right-hand transformations into V
    3. Accumulation of the left-hand transformations into U
    4. Implicit-shift QR diagonalization of the bidiagonal form

Phases 1-3 address rows and columns through the strided BLAS kernels.
Phase 4 rotates whole column pairs of U and V as numpy column views.

Singular values are non-negative but NOT sorted.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from pysvd.core.compute.precision import MAX_QR_ITERATIONS
from pysvd.linalg.blas import axpy, dot


@dataclass(frozen=True)
class Bidiagonal:
    """
    Output of the Householder reduction.

    Attributes:
        q: Diagonal of the bidiagonal form (n,)
        e: Super-diagonal, e[i] couples q[i-1] and q[i]; e[0] == 0 (m,)
        g: Scale of the last row reflection, seeds phase 2
        l: First column touched by the last row reflection, seeds phase 2
        max_norm: max_i |q[i]| + |e[i]|, scales eps in phase 4
    """
    q: NDArray[np.float64]
    e: NDArray[np.float64]
    g: float
    l: int
    max_norm: float


@dataclass(frozen=True)
class Diagonalization:
    """
    Convergence record of phase 4.

    Attributes:
        iterations: QR sweeps performed, per singular value index
        non_converged: Indices whose iteration cap was exhausted
        threshold: eps * max_norm, the negligibility threshold
    """
    iterations: tuple[int, ...]
    non_converged: tuple[int, ...]
    threshold: float


def bidiagonalize(u: NDArray[np.float64], m: int, n: int, tol: float) -> Bidiagonal:
    """
    Householder reduction of u (m x n, row-major) to bidiagonal form, in place.

    Column i is reflected to zero below the diagonal, then row i is
    reflected to zero right of the super-diagonal. Reflections whose
    squared norm is below tol are skipped (scale 0). The reflection
    vectors stay in u for the accumulation phases.
    """
    e = np.zeros(m, dtype=np.float64)
    q = np.zeros(n, dtype=np.float64)
    g = 0.0
    x = 0.0
    l = 0

    for i in range(n):
        e[i] = g
        ii = i * n + i
        s = dot(m - i, u, n, ii, u, n, ii)
        l = i + 1
        if s < tol:
            g = 0.0
        else:
            f = u[ii]
            g = math.sqrt(s) if f < 0 else -math.sqrt(s)
            h = f * g - s
            u[ii] = f - g
            for j in range(l, n):
                s = dot(m - i, u, n, ii, u, n, i * n + j)
                axpy(m - i, s / h, u, n, ii, u, n, i * n + j)
        q[i] = g

        s = dot(n - l, u, 1, i * n + l, u, 1, i * n + l)
        if s < tol:
            g = 0.0
        else:
            f = u[ii + 1]
            g = math.sqrt(s) if f < 0 else -math.sqrt(s)
            h = f * g - s
            u[ii + 1] = f - g
            for j in range(l, n):
                e[j] = u[i * n + j] / h
            for j in range(l, m):
                s = dot(n - l, u, 1, i * n + l, u, 1, j * n + l)
                axpy(n - l, s, e, 1, l, u, 1, j * n + l)

        y = abs(q[i]) + abs(e[i])
        if y > x:
            x = y

    return Bidiagonal(q=q, e=e, g=g, l=l, max_norm=float(x))


def accumulate_right(
    u: NDArray[np.float64],
    v: NDArray[np.float64],
    bidiagonal: Bidiagonal,
    n: int,
) -> None:
    """
    Build V (n x n, row-major) from the row reflections stored in u.

    Walks columns from last to first, applying each stored reflection to
    the trailing block of V already built.
    """
    e = bidiagonal.e
    g = bidiagonal.g
    l = bidiagonal.l

    for i in range(n - 1, -1, -1):
        if g != 0:
            h = u[i * n + i + 1] * g
            for j in range(l, n):
                v[j * n + i] = u[i * n + j] / h
            for j in range(l, n):
                s = dot(n - l, u, 1, i * n + l, v, n, l * n + j)
                axpy(n - l, s, v, n, l * n + i, v, n, l * n + j)
        for j in range(l, n):
            v[i * n + j] = 0.0
            v[j * n + i] = 0.0
        v[i * n + i] = 1.0
        g = e[i]
        l = i


def accumulate_left(u: NDArray[np.float64], q: NDArray[np.float64], m: int, n: int) -> None:
    """
    Overwrite u (m x n) with U built from the column reflections it stores.

    Columns whose reflection was skipped become unit vectors.
    """
    columns = u.reshape(m, n)
    for i in range(n - 1, -1, -1):
        l = i + 1
        g = q[i]
        u[i * n + l:(i + 1) * n] = 0.0
        if g != 0:
            h = u[i * n + i] * g
            for j in range(l, n):
                s = dot(m - l, u, n, l * n + i, u, n, l * n + j)
                axpy(m - i, s / h, u, n, i * n + i, u, n, i * n + j)
            columns[i:, i] /= g
        else:
            columns[i:, i] = 0.0
        u[i * n + i] += 1.0


def _rotate(columns: NDArray[np.float64], i: int, j: int, c: float, s: float) -> None:
    """Givens rotation of column pair (i, j): [y z] <- [y c + z s, -y s + z c]."""
    y = columns[:, i].copy()
    z = columns[:, j]
    columns[:, i] = y * c + z * s
    columns[:, j] = -y * s + z * c


def diagonalize(
    u: NDArray[np.float64],
    v: NDArray[np.float64],
    q: NDArray[np.float64],
    e: NDArray[np.float64],
    m: int,
    n: int,
    threshold: float,
    max_iterations: int = MAX_QR_ITERATIONS,
) -> Diagonalization:
    """
    Implicit-shift QR iteration on the bidiagonal (q, e), in place.

    For k = n-1 .. 0, sweeps until e[k] is negligible (|.| <= threshold),
    then makes q[k] non-negative by flipping column k of V. After
    max_iterations sweeps the current q[k] is accepted and k is recorded
    as non-converged.
    """
    U = u.reshape(m, n)
    V = v.reshape(n, n)
    iterations = [0] * n
    non_converged: list[int] = []

    for k in range(n - 1, -1, -1):
        for iteration in range(max_iterations):
            iterations[k] = iteration + 1

            # Splitting: find l with e[l] or q[l-1] negligible. e[0] is
            # always zero, so the scan stops at l = 0 at the latest.
            cancel = True
            l = 0
            for l in range(k, -1, -1):
                if abs(e[l]) <= threshold:
                    cancel = False
                    break
                if l > 0 and abs(q[l - 1]) <= threshold:
                    break

            if cancel:
                # q[l-1] is negligible: chase e[l] out with rotations
                # against column l-1 of U.
                c = 0.0
                s = 1.0
                l1 = l - 1
                for i in range(l, k + 1):
                    f = s * e[i]
                    e[i] = c * e[i]
                    if abs(f) <= threshold:
                        break
                    g = q[i]
                    h = math.sqrt(f * f + g * g)
                    q[i] = h
                    c = g / h
                    s = -f / h
                    _rotate(U, l1, i, c, s)

            z = q[k]
            if l == k:
                if z < 0:
                    q[k] = -z
                    V[:, k] *= -1
                break

            # Shift from the bottom 2x2 minor
            x = q[l]
            y = q[k - 1]
            g = e[k - 1]
            h = e[k]
            f = ((y - z) * (y + z) + (g - h) * (g + h)) / (2 * h * y)
            g = math.sqrt(f * f + 1)
            f = ((x - z) * (x + z) + h * (y / (f - g if f < 0 else f + g) - h)) / x

            # Next QR transformation
            c = 1.0
            s = 1.0
            for i in range(l + 1, k + 1):
                g = e[i]
                y = q[i]
                h = s * g
                g = c * g
                z = math.sqrt(f * f + h * h)
                e[i - 1] = z
                c = f / z
                s = h / z
                f = x * c + g * s
                g = -x * s + g * c
                h = y * s
                y = y * c
                _rotate(V, i - 1, i, c, s)
                z = math.sqrt(f * f + h * h)
                q[i - 1] = z
                c = f / z
                s = h / z
                f = c * g + s * y
                x = -s * g + c * y
                _rotate(U, i - 1, i, c, s)
            e[l] = 0.0
            e[k] = f
            q[k] = x
        else:
            non_converged.append(k)

    # Values below the threshold are zero
    q[q < threshold] = 0.0

    return Diagonalization(
        iterations=tuple(iterations),
        non_converged=tuple(sorted(non_converged)),
        threshold=float(threshold),
    )

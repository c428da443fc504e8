"""
Decomposition solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pysvd.core.compute.tolerances import ToleranceTier, select_tolerance
from pysvd.core.result import Result
from pysvd.linalg.matrix import Matrix, diagonal_multiply, identity, multiply, transpose

if TYPE_CHECKING:
    from pysvd.svd.design import SVDDesign


@dataclass(frozen=True)
class SVDParams:
    """
    Parameter payload for a singular value decomposition.

    A = u diag(q) v'

    Attributes:
        q: Singular values (n,), non-negative, not necessarily sorted
        u: Left basis, m x n with orthonormal columns
        v: Right basis, n x n with orthonormal columns
        converged: False if any singular value hit the iteration cap
        iterations: QR sweeps spent on each singular value
    """
    q: NDArray[np.float64]
    u: Matrix
    v: Matrix
    converged: bool
    iterations: tuple[int, ...]


@dataclass
class SVDSolution:
    """
    User-facing decomposition results.

    Wraps the backend Result and provides accessors, the sorted view and
    quality checks of the decomposition.
    """
    _result: Result[SVDParams]
    _design: 'SVDDesign'

    @property
    def q(self) -> NDArray[np.float64]:
        """Singular values in the order the algorithm produced them."""
        return self._result.params.q

    @property
    def singular_values(self) -> NDArray[np.float64]:
        return self._result.params.q

    @property
    def u(self) -> Matrix:
        return self._result.params.u

    @property
    def v(self) -> Matrix:
        return self._result.params.v

    @property
    def converged(self) -> bool:
        return self._result.params.converged

    @property
    def iterations(self) -> tuple[int, ...]:
        return self._result.params.iterations

    @property
    def rank(self) -> int:
        """Number of singular values not clamped to zero."""
        return int(np.count_nonzero(self.q))

    @property
    def condition_number(self) -> float:
        """
        Ratio of the largest to the smallest singular value.

        inf if any singular value is zero.
        """
        q = self.q
        if len(q) == 0:
            return 1.0
        smallest = float(np.min(q))
        if smallest == 0.0:
            return float('inf')
        return float(np.max(q)) / smallest

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    @property
    def provenance(self) -> dict[str, str]:
        return self._result.provenance

    def reconstruct(self) -> Matrix:
        """u diag(q) v'"""
        return multiply(self.u, diagonal_multiply(self.q, transpose(self.v)))

    def sorted(self) -> SVDSolution:
        """
        Solution with singular values in descending order.

        Columns of u and v are permuted accordingly; the order among equal
        values follows their original positions.
        """
        order = np.argsort(-self.q, kind='stable')
        params = self._result.params
        u = self.u.to_array()[:, order]
        v = self.v.to_array()[:, order]
        sorted_params = SVDParams(
            q=self.q[order].copy(),
            u=Matrix.from_array(u),
            v=Matrix.from_array(v),
            converged=params.converged,
            iterations=tuple(params.iterations[i] for i in order),
        )
        result = Result(
            params=sorted_params,
            info={**self._result.info, 'sorted': True, 'order': order.tolist()},
            timing=self._result.timing,
            backend_name=self._result.backend_name,
            warnings=self._result.warnings,
            provenance=self._result.provenance,
        )
        return SVDSolution(_result=result, _design=self._design)

    def orthogonality_error(self) -> float:
        """max |u'u - I| and |v'v - I| over all cells."""
        n = self.v.cols
        eye = identity(n).data
        utu = multiply(transpose(self.u), self.u).data
        vtv = multiply(transpose(self.v), self.v).data
        return float(max(np.max(np.abs(utu - eye)), np.max(np.abs(vtv - eye))))

    def reconstruction_error(self) -> float:
        """max |u diag(q) v' - A| over all cells."""
        return float(np.max(np.abs(self.reconstruct().data - self._design.matrix.data)))

    def check(self, tier: ToleranceTier | None = None) -> bool:
        """
        Whether the decomposition satisfies its identities within a tier.

        Defaults to the tier expected for this solution's convergence state.
        """
        if tier is None:
            tier = select_tolerance(self.converged)
        scale = float(np.max(self.q)) if len(self.q) else 0.0
        recon_tol = tier.atol + tier.rtol * scale
        return (
            self.orthogonality_error() <= tier.atol + tier.rtol
            and self.reconstruction_error() <= recon_tol
        )

    def summary(self) -> str:
        """Text summary of the decomposition."""
        m, n = self._design.m, self._design.n
        lines = [
            "Singular Value Decomposition",
            "=" * 60,
            f"Shape: {m} x {n}",
            f"Rank: {self.rank}",
            f"Condition number: {self.condition_number:.6g}",
            f"Converged: {self.converged}",
            "",
            "Singular values:",
            "-" * 60,
        ]
        for i, value in enumerate(self.q):
            lines.append(f"  q[{i}]: {value:16.8g}   ({self.iterations[i]} sweeps)")
        lines.append("-" * 60)
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"SVDSolution(m={self._design.m}, n={self._design.n}, "
            f"rank={self.rank}, converged={self.converged})"
        )

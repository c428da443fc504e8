"""
Least-squares solution types.
"""

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pysvd.core.result import Result

if TYPE_CHECKING:
    from pysvd.lstsq.design import LeastSquaresDesign


@dataclass(frozen=True)
class LeastSquaresParams:
    """
    Parameter payload for a minimum-norm least-squares solve.

    This is the immutable data computed by backends.
    """
    x: NDArray[np.float64]
    residuals: NDArray[np.float64]
    fitted_values: NDArray[np.float64]
    rss: float
    rank: int
    singular_values: NDArray[np.float64]
    converged: bool


@dataclass
class LeastSquaresSolution:
    """
    User-facing least-squares results.

    Wraps the backend Result and provides accessors for the solution
    vector and fit diagnostics.
    """
    _result: Result[LeastSquaresParams]
    _design: 'LeastSquaresDesign'

    @property
    def x(self) -> NDArray[np.float64]:
        """Minimum-norm minimizer of ||A x - b||_2."""
        return self._result.params.x

    @property
    def residuals(self) -> NDArray[np.float64]:
        """b - A x"""
        return self._result.params.residuals

    @property
    def fitted_values(self) -> NDArray[np.float64]:
        return self._result.params.fitted_values

    @property
    def rss(self) -> float:
        return self._result.params.rss

    @property
    def rank(self) -> int:
        return self._result.params.rank

    @property
    def singular_values(self) -> NDArray[np.float64]:
        return self._result.params.singular_values

    @property
    def converged(self) -> bool:
        return self._result.params.converged

    @property
    def is_rank_deficient(self) -> bool:
        return self.rank < self._design.n

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

    def summary(self) -> str:
        """Text summary of the solve."""
        lines = [
            "Least Squares Solution",
            "=" * 60,
            f"Equations: {self._design.m}",
            f"Unknowns: {self._design.n}",
            f"Rank: {self.rank}",
            f"Residual sum of squares: {self.rss:.6g}",
            "",
            "Solution:",
            "-" * 60,
        ]
        for i, value in enumerate(self.x):
            lines.append(f"  x[{i}]: {value:16.8g}")
        lines.append("-" * 60)
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"LeastSquaresSolution(m={self._design.m}, n={self._design.n}, "
            f"rank={self.rank}, rss={self.rss:.4g})"
        )

"""
Generic result container for all PySVD computations.

Every decomposition and solve returns its payload inside a Result envelope.
This keeps timing, diagnostics and reproducibility metadata in one place
while letting each domain define its own parameter structure.

Design decisions:
    - Generic over parameter payload P
    - info dict for flexible metadata (converged, iterations, rank)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

import platform
from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

import numpy as np

P = TypeVar('P')  # Parameter payload type


def _default_provenance() -> dict[str, str]:
    """Version metadata recorded with every result."""
    from pysvd import __version__

    return {
        'pysvd_version': __version__,
        'numpy_version': np.__version__,
        'python_version': platform.python_version(),
    }


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for numerical computations.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific payload (singular values, bases, solution)
        info: Structured metadata (method, convergence, rank)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation
        provenance: Library versions used to produce the result

    Examples:
        >>> Result(
        ...     params=SVDParams(q=q, u=u, v=v, converged=True, iterations=7),
        ...     info={'method': 'golub_reinsch', 'converged': True},
        ...     timing={'total_seconds': 0.01},
        ...     backend_name='cpu_golub_reinsch'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
    provenance: dict[str, str] = field(default_factory=_default_provenance)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)

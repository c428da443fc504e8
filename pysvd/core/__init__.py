"""
Core infrastructure for PySVD.

Shared abstractions used by the linear algebra, decomposition and
least-squares packages.

Key components:
    protocols: LinearMap, LinearOperator, Backend protocols
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing, precision constants and tolerance tiers
"""

from pysvd.core.protocols import LinearMap, LinearOperator, Backend
from pysvd.core.result import Result
from pysvd.core.exceptions import (
    PySVDError,
    ValidationError,
    DimensionError,
    NumericalError,
    ConvergenceError,
)

__all__ = [
    # Protocols
    "LinearMap",
    "LinearOperator",
    "Backend",
    # Result
    "Result",
    # Exceptions
    "PySVDError",
    "ValidationError",
    "DimensionError",
    "NumericalError",
    "ConvergenceError",
]

"""
Exception hierarchy for PySVD.

All exceptions inherit from PySVDError to allow catching any
library-specific error.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages state actual vs expected shapes or values
    - Errors propagate unchanged from decompose() to the solvers built on it
"""


class PySVDError(Exception):
    """Base exception for all PySVD errors."""
    pass


class ValidationError(PySVDError):
    """
    Input validation failed.

    Raised when user-provided inputs cannot be interpreted as finite
    double-precision data.
    """
    pass


class DimensionError(ValidationError):
    """
    Matrix or vector dimensions are incompatible.

    Raised when a decomposition is requested for a matrix with fewer rows
    than columns, when a product is formed from operands whose inner
    dimensions disagree, or when a buffer length is not a multiple of the
    column count it is tagged with.

    Attributes:
        expected: Expected shape or length, if known
        actual: Offending shape or length, if known
    """

    def __init__(
        self,
        message: str,
        expected: tuple[int, ...] | int | None = None,
        actual: tuple[int, ...] | int | None = None,
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class NumericalError(PySVDError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class ConvergenceError(PySVDError):
    """
    Iterative diagonalization failed to converge.

    Only raised when a caller opts in with ``strict=True``; by default the
    engine accepts the current diagonal value and reports the problem
    through ``SVDSolution.converged`` and a RuntimeWarning.

    Attributes:
        iterations: Iteration cap that was exhausted
        reason: Why convergence failed (e.g., 'max_iterations')
        threshold: The split threshold (eps * max norm) that was not met
        indices: Singular value indices that did not converge
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        reason: str | None = None,
        threshold: float | None = None,
        indices: tuple[int, ...] = (),
    ):
        super().__init__(message)
        self.iterations = iterations
        self.reason = reason
        self.threshold = threshold
        self.indices = indices

"""
Core protocols for PySVD.

These define structural interfaces shared by the linear-operator variants
and by the computational backends. We use Protocol (structural typing)
rather than ABC (nominal typing): the operator variants form a closed set,
and the protocols only name the capabilities call sites rely on.

Design Principles:
    - Minimal contracts: prescribe only what call sites use
    - A linear map is characterized by f(a + c*b) = f(a) + c*f(b)
    - Square operators add an in-place update, x := f(x)
"""

from typing import Callable, Protocol, TypeVar, runtime_checkable

import numpy as np
from numpy.typing import NDArray

P = TypeVar('P')  # Parameter payload type
D = TypeVar('D')  # Design type

# Receives one nonzero cell (coefficient, row, column) of a linear map.
CellSink = Callable[[float, int, int], None]


@runtime_checkable
class LinearMap(Protocol):
    """
    Capability set shared by every linear-map variant.

    Equivalent to a matrix, but variants with structure (diagonal,
    reflections) need far fewer multiplications than a dense matrix.
    """

    @property
    def input_dimension(self) -> int:
        """Corresponds to matrix column count."""
        ...

    @property
    def output_dimension(self) -> int:
        """Corresponds to matrix row count."""
        ...

    def foreach2d(self, sink: CellSink) -> None:
        """
        Call sink(c_ij, i, j) for every semantically nonzero cell.

        Visiting order is unspecified.
        """
        ...

    def transpose(self) -> 'LinearMap':
        """Return the transposed map."""
        ...


@runtime_checkable
class LinearOperator(Protocol):
    """
    Square linear map intended for in-place updates, x := f(x).
    """

    @property
    def dimension(self) -> int:
        """Row and column count."""
        ...

    def update(self, x: NDArray[np.float64]) -> None:
        """Overwrite x with f(x)."""
        ...

    def foreach2d(self, sink: CellSink) -> None:
        """Call sink(c_ij, i, j) for every semantically nonzero cell."""
        ...

    def transpose(self) -> 'LinearOperator':
        """Return the transposed operator."""
        ...


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    Each backend takes a validated design and produces a Result envelope
    around its parameter payload. Backends are stateless, so concurrent
    calls on disjoint inputs need no synchronization.

    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}'
        Examples: 'cpu_golub_reinsch', 'cpu_lapack', 'cpu_pinv'
        """
        ...

    def solve(self, design: D) -> 'Result[P]':
        """
        Execute the computation.

        Raises:
            DimensionError: If the design is invalid for this backend
            ConvergenceError: If a strict design fails to converge
        """
        ...

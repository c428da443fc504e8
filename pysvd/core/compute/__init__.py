"""
Shared compute infrastructure for PySVD.

IMPORTANT: This is NOT where backends live. Those go in
{domain}/backends/. This module contains shared numeric infrastructure.

Submodules:
    timing: Execution timing utilities
    precision: Machine epsilon and default engine parameters
    tolerances: Tolerance tiers for judging decompositions
"""

from pysvd.core.compute.timing import Timer
from pysvd.core.compute.precision import (
    EPSILON_64,
    MAX_QR_ITERATIONS,
    default_tolerance,
    machine_epsilon,
)

__all__ = [
    "Timer",
    "EPSILON_64",
    "MAX_QR_ITERATIONS",
    "default_tolerance",
    "machine_epsilon",
]

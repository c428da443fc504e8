"""
Tolerance tiers for judging decomposition quality.

Defines how closely a decomposition must satisfy its defining identities:
    - U'U = I and V'V = I (orthonormal bases)
    - U diag(q) V' = A (reconstruction)

Used by SVDSolution.check() and by the test suite.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Machine-precision agreement, for well-conditioned inputs
STRICT = ToleranceTier(
    rtol=1e-10,
    atol=1e-10,
    name='strict',
    description='Double precision, well-conditioned input',
)

# Per-cell absolute tolerance of the classic Golub-Reinsch test fixtures
STANDARD = ToleranceTier(
    rtol=0.0,
    atol=1e-4,
    name='standard',
    description='Absolute 1e-4 per cell, as in the Golub-Reinsch fixtures',
)

# Loose agreement for ill-conditioned or non-converged results
RELAXED = ToleranceTier(
    rtol=1e-2,
    atol=1e-3,
    name='relaxed',
    description='Ill-conditioned input or non-converged diagonalization',
)


def select_tolerance(converged: bool, is_ill_conditioned: bool = False) -> ToleranceTier:
    """Select the tier a decomposition is expected to meet."""
    if not converged or is_ill_conditioned:
        return RELAXED
    return STANDARD

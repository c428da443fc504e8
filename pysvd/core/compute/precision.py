"""
Numerical precision constants.

Defaults used by the decomposition engine. They reproduce the classic
Golub-Reinsch parameters: eps is the float64 unit roundoff and the
"negligible column" threshold is 1e-64 / eps.
"""

import numpy as np


# Machine epsilon for float64, 2**-52
EPSILON_64: float = float(np.finfo(np.float64).eps)

# Numerator of the default Householder skip threshold (tol = 1e-64 / eps)
TOLERANCE_SCALE: float = 1e-64

# QR sweeps allowed per singular value before the current value is accepted
MAX_QR_ITERATIONS: int = 50


def machine_epsilon(dtype: np.dtype | type = np.float64) -> float:
    """Get machine epsilon for a given dtype."""
    return float(np.finfo(dtype).eps)


def default_tolerance(eps: float = EPSILON_64) -> float:
    """
    Threshold below which a squared column or row norm is treated as zero.

    A Householder reflection is skipped for such columns to avoid dividing
    by a vanishing norm.
    """
    return TOLERANCE_SCALE / eps


def resolve_eps_tol(eps: float | None, tol: float | None) -> tuple[float, float]:
    """
    Fill in default eps and tol; tol defaults relative to the resolved eps.

    None and 0 both select the default, so callers may pass 0 to mean
    "unset".

    Raises:
        ValueError: If eps or tol is negative
    """
    if not eps:
        eps = EPSILON_64
    if eps < 0.0:
        raise ValueError(f"eps must be positive, got {eps}")
    if not tol:
        tol = default_tolerance(eps)
    if tol < 0.0:
        raise ValueError(f"tol must be positive, got {tol}")
    return float(eps), float(tol)

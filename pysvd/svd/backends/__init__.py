"""
Decomposition backends.

Available backends:
    GolubReinschBackend: CPU reference implementation (Householder + QR sweeps)
    LapackBackend: CPU cross-check through LAPACK (SciPy)
"""

from pysvd.svd.backends.cpu import GolubReinschBackend, LapackBackend

__all__ = [
    "GolubReinschBackend",
    "LapackBackend",
]

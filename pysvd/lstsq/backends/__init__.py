"""
Least-squares backends.

Available backends:
    PseudoInverseBackend: CPU minimum-norm solve through the Golub-Reinsch SVD
"""

from pysvd.lstsq.backends.cpu import PseudoInverseBackend, pseudo_inverse_diagonal

__all__ = [
    "PseudoInverseBackend",
    "pseudo_inverse_diagonal",
]

"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pysvd.linalg.matrix import Matrix


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def golub_reinsch_first():
    """8 x 5 example from Golub & Reinsch (1970); rank 3."""
    return Matrix.from_rows([
        [22, 10, 2, 3, 7],
        [14, 7, 10, 0, 8],
        [-1, 13, -1, -11, 3],
        [-3, -2, 13, -2, 4],
        [9, 8, 1, -2, 4],
        [9, 1, -7, 5, -1],
        [2, -6, 6, 5, 1],
        [4, 5, 0, -2, 2],
    ])


@pytest.fixture
def golub_reinsch_second():
    """21 x 20 upper-triangular example: 21 - i on the diagonal, -1 above."""
    a = np.zeros((21, 20))
    for i in range(21):
        for j in range(20):
            if i == j:
                a[i, j] = 21 - i
            elif i < j:
                a[i, j] = -1
    return Matrix.from_array(a)


@pytest.fixture
def golub_reinsch_third():
    """30 x 30 unit upper-triangular example with -1 above the diagonal."""
    a = np.triu(-np.ones((30, 30)), k=1) + np.eye(30)
    return Matrix.from_array(a)


@pytest.fixture
def tall_random(rng):
    """Generic 12 x 5 matrix."""
    return Matrix.from_array(rng.standard_normal((12, 5)))


@pytest.fixture
def rank_deficient(rng):
    """10 x 4 matrix whose last column is the sum of the first two."""
    X = rng.standard_normal((10, 3))
    return Matrix.from_array(np.column_stack([X, X[:, 0] + X[:, 1]]))

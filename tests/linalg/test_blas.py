"""
Tests for the strided dot / axpy kernels.
"""

import numpy as np

from pysvd.linalg.blas import axpy, dot


class TestDot:

    def test_unit_stride(self):
        x = np.array([1.0, 2.0, 3.0])
        y = np.array([4.0, 5.0, 6.0])
        assert dot(3, x, 1, 0, y, 1, 0) == 32.0

    def test_zero_length(self):
        x = np.array([1.0, 2.0])
        assert dot(0, x, 1, 0, x, 1, 0) == 0.0
        assert dot(-3, x, 1, 0, x, 1, 0) == 0.0

    def test_strided_columns(self):
        # 3 x 2 row-major, columns are stride 2
        buf = np.array([1.0, 2.0, 3.0, 4.0, 5.0, 6.0])
        assert dot(3, buf, 2, 0, buf, 2, 1) == 1 * 2 + 3 * 4 + 5 * 6

    def test_offsets(self):
        x = np.arange(10, dtype=np.float64)
        # x[2], x[5], x[8] against x[1], x[2], x[3]
        assert dot(3, x, 3, 2, x, 1, 1) == 2 * 1 + 5 * 2 + 8 * 3

    def test_matches_numpy_long_vectors(self, rng):
        # lengths that are not a multiple of 4 exercise any remainder handling
        for n in (1, 2, 3, 5, 17, 103):
            x = rng.standard_normal(3 * n)
            y = rng.standard_normal(n + 4)
            expected = np.dot(x[1::3][:n], y[4:4 + n])
            np.testing.assert_allclose(dot(n, x, 3, 1, y, 1, 4), expected, rtol=1e-12)

    def test_returns_python_float(self):
        x = np.ones(4)
        assert isinstance(dot(4, x, 1, 0, x, 1, 0), float)


class TestAxpy:

    def test_unit_stride(self):
        x = np.array([1.0, 2.0, 3.0])
        y = np.array([10.0, 20.0, 30.0])
        axpy(3, 2.0, x, 1, 0, y, 1, 0)
        np.testing.assert_array_equal(y, [12.0, 24.0, 36.0])
        np.testing.assert_array_equal(x, [1.0, 2.0, 3.0])

    def test_zero_length_is_noop(self):
        y = np.array([1.0, 2.0])
        axpy(0, 5.0, y, 1, 0, y, 1, 0)
        np.testing.assert_array_equal(y, [1.0, 2.0])

    def test_only_addressed_elements_change(self):
        x = np.array([1.0, 1.0])
        y = np.zeros(7)
        axpy(2, 3.0, x, 1, 0, y, 3, 1)
        np.testing.assert_array_equal(y, [0.0, 3.0, 0.0, 0.0, 3.0, 0.0, 0.0])

    def test_shared_buffer_columns(self):
        # column 1 += -1 * column 0 of a 3 x 2 row-major matrix
        buf = np.array([1.0, 5.0, 2.0, 6.0, 3.0, 7.0])
        axpy(3, -1.0, buf, 2, 0, buf, 2, 1)
        np.testing.assert_array_equal(buf, [1.0, 4.0, 2.0, 4.0, 3.0, 4.0])

    def test_matches_numpy(self, rng):
        x = rng.standard_normal(11)
        y = rng.standard_normal(11)
        expected = y + 0.25 * x
        axpy(11, 0.25, x, 1, 0, y, 1, 0)
        np.testing.assert_allclose(y, expected, rtol=1e-14)

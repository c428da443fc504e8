"""
Tests for PySVD exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PySVDError)
    - Diagnostic attributes on DimensionError and ConvergenceError
    - Default attribute values
"""

import pytest

from pysvd.core.exceptions import (
    ConvergenceError,
    DimensionError,
    NumericalError,
    PySVDError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via PySVDError."""

    def test_validation_error_is_pysvd_error(self):
        with pytest.raises(PySVDError):
            raise ValidationError("bad input")

    def test_dimension_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise DimensionError("wrong shape")

    def test_numerical_error_is_pysvd_error(self):
        with pytest.raises(PySVDError):
            raise NumericalError("computation failed")

    def test_convergence_error_is_pysvd_error(self):
        with pytest.raises(PySVDError):
            raise ConvergenceError("did not converge", iterations=50)

    def test_convergence_error_is_not_validation_error(self):
        err = ConvergenceError("did not converge", iterations=50)
        assert not isinstance(err, ValidationError)


# ═══════════════════════════════════════════════════════════════════════
# DimensionError
# ═══════════════════════════════════════════════════════════════════════


class TestDimensionError:
    """DimensionError carries the expected and actual shapes."""

    def test_message(self):
        err = DimensionError("Invalid matrix: m < n")
        assert str(err) == "Invalid matrix: m < n"

    def test_defaults_are_none(self):
        err = DimensionError("wrong shape")
        assert err.expected is None
        assert err.actual is None

    def test_shapes(self):
        err = DimensionError("wrong shape", expected=(21, 21), actual=(20, 21))
        assert err.expected == (21, 21)
        assert err.actual == (20, 21)


# ═══════════════════════════════════════════════════════════════════════
# ConvergenceError
# ═══════════════════════════════════════════════════════════════════════


class TestConvergenceError:
    """ConvergenceError carries iteration diagnostics."""

    def test_all_attributes(self):
        err = ConvergenceError(
            "QR iteration did not converge",
            iterations=50,
            reason="max_iterations",
            threshold=1e-14,
            indices=(3, 4),
        )
        assert str(err) == "QR iteration did not converge"
        assert err.iterations == 50
        assert err.reason == "max_iterations"
        assert err.threshold == 1e-14
        assert err.indices == (3, 4)

    def test_required_iterations(self):
        err = ConvergenceError("failed", 42)
        assert err.iterations == 42

    def test_defaults(self):
        err = ConvergenceError("failed", iterations=10)
        assert err.reason is None
        assert err.threshold is None
        assert err.indices == ()

"""Unit tests for the complex helper functions."""

import cmath
import math

from shared.complex_math import acot, acoth, close_to, cot, coth, ipow, safe_div
from tests.complex_assertions import assert_close_to, some_small_numbers


class TestSafeDiv:
    """Test division without exceptions."""

    def test_regular_division(self):
        """Test non-zero divisors divide normally."""
        assert_close_to(safe_div(4 + 2j, 2), 2 + 1j)

    def test_division_by_zero(self):
        """Test zero divisors give inf for non-zero parts and nan for zero parts."""
        q = safe_div(complex(1, 0), 0)

        assert math.isinf(q.real) and q.real > 0
        assert math.isnan(q.imag)

    def test_negative_division_by_zero(self):
        """Test the sign of the infinite parts is kept."""
        q = safe_div(complex(-1, 2), 0)

        assert q.real == -math.inf
        assert q.imag == math.inf


class TestIpow:
    """Test integer powers."""

    def test_special_exponents(self):
        """Test exponents 0 and 1."""
        for z in some_small_numbers():
            assert ipow(z, 0) == 1
            assert ipow(z, 1) == z

    def test_positive_exponents(self):
        """Test powers agree with repeated multiplication."""
        assert_close_to(ipow(2, 3), 8)
        assert_close_to(ipow(1j, 2), -1)
        for z in some_small_numbers():
            assert_close_to(ipow(z, 3), z * z * z, 1e-9)

    def test_negative_exponents(self):
        """Test negative exponents give reciprocals."""
        assert_close_to(ipow(2, -1), 0.5)
        assert_close_to(ipow(1j, -1), -1j)


class TestTrigonometric:
    """Test cot, coth and their inverses."""

    def test_cot(self):
        """Test cot(z) tan(z) = 1."""
        for z in some_small_numbers():
            assert_close_to(cot(z) * cmath.tan(z), 1, 1e-9)

    def test_coth(self):
        """Test coth(z) tanh(z) = 1."""
        for z in some_small_numbers():
            assert_close_to(coth(z) * cmath.tanh(z), 1, 1e-9)

    def test_acot_inverts_cot(self):
        """Test acot(cot(z)) = z on the principal branch."""
        z = 0.5 + 0.2j

        assert_close_to(acot(cot(z)), z, 1e-9)

    def test_acoth_inverts_coth(self):
        """Test acoth(coth(z)) = z on the principal branch."""
        z = 0.5 + 0.2j

        assert_close_to(acoth(coth(z)), z, 1e-9)


class TestCloseTo:
    """Test the eps disc check."""

    def test_close(self):
        """Test points inside the disc."""
        assert close_to(1 + 1j, 1.0005 + 1j, 1e-3)

    def test_not_close(self):
        """Test points on or outside the disc."""
        assert not close_to(0, 1, 1)
        assert not close_to(1 + 1j, 1 + 1.1j, 1e-3)

"""Unit tests for ComplexPolynomial."""

import pytest

from shared.complex_math import ComplexPolynomial
from tests.complex_assertions import assert_close_to, some_numbers, some_small_numbers


class TestConstruction:
    """Test polynomial construction and coefficient access."""

    def test_empty_polynomial(self):
        """Test the polynomial without coefficients has degree -1."""
        p = ComplexPolynomial()

        assert p.degree == -1
        assert len(p) == 0
        assert_close_to(p[0], 0)

    def test_constant_polynomial(self):
        """Test out of range indices yield zero."""
        p = ComplexPolynomial(1)

        assert p.degree == 0
        assert_close_to(p[0], 1)
        assert_close_to(p[-1], 0)
        assert_close_to(p[1], 0)

    def test_coefficients_highest_order_first(self):
        """Test the first coefficient belongs to the highest power."""
        p = ComplexPolynomial(2j, 0, -1)

        assert p.degree == 2
        assert_close_to(p[3], 0)
        assert_close_to(p[2], 2j)
        assert_close_to(p[1], 0)
        assert_close_to(p[0], -1)
        assert_close_to(p[-1], 0)
        assert p.coefficients == (2j, 0j, -1 + 0j)

    def test_one(self):
        """Test the constant one."""
        assert ComplexPolynomial.one() == ComplexPolynomial(1)

    def test_from_no_zeros(self):
        """Test the empty product is one."""
        p = ComplexPolynomial.from_zeros([])

        assert p.degree == 0
        assert_close_to(p[0], 1)

    def test_from_zeros(self):
        """Test building a polynomial from its zeros."""
        p = ComplexPolynomial.from_zeros([1])
        assert p.degree == 1
        assert_close_to(p[1], 1)
        assert_close_to(p[0], -1)

        p = ComplexPolynomial.from_zeros([3, -2, -1])
        assert p.degree == 3
        assert_close_to(p[3], 1)
        assert_close_to(p[2], 0)
        assert_close_to(p[1], -7)
        assert_close_to(p[0], -6)

    def test_equality_and_hash(self):
        """Test polynomials compare by coefficients."""
        assert ComplexPolynomial(1, 2) == ComplexPolynomial(1 + 0j, 2 + 0j)
        assert ComplexPolynomial(1, 2) != ComplexPolynomial(2, 1)
        assert hash(ComplexPolynomial(1, 2)) == hash(ComplexPolynomial(1, 2))

    def test_repr(self):
        """Test repr lists the coefficients."""
        assert repr(ComplexPolynomial(1)) == "ComplexPolynomial((1+0j),)"


class TestEvaluation:
    """Test evaluating polynomials."""

    def test_empty_evaluates_to_zero(self):
        """Test the empty polynomial is zero everywhere."""
        p = ComplexPolynomial()
        for z in some_numbers():
            assert_close_to(p(z), 0)

    def test_constant(self):
        """Test constants evaluate to themselves."""
        for c in some_numbers():
            p = ComplexPolynomial(c)
            for z in some_numbers():
                assert_close_to(p(z), c)

    def test_affine(self):
        """Test 2z + 1 - i."""
        p = ComplexPolynomial(2, 1 - 1j)
        for z in some_numbers():
            assert_close_to(p(z), 2 * z + 1 - 1j)

    def test_square(self):
        """Test 2i z^2 - 1."""
        p = ComplexPolynomial(2j, 0, -1)
        for z in some_numbers():
            assert_close_to(p(z), 2j * z * z - 1, 1e-9)


class TestTransformations:
    """Test normalize, moved, derivative and integral."""

    def test_normalize(self):
        """Test the leading coefficient becomes one."""
        q = ComplexPolynomial(2, 0, -1).normalize()

        assert q.degree == 2
        assert_close_to(q[2], 1)
        assert_close_to(q[1], 0)
        assert_close_to(q[0], -0.5)

    def test_normalize_edge_cases(self):
        """Test normalizing empty, constant and imaginary-led polynomials."""
        assert ComplexPolynomial().normalize().degree == -1

        q = ComplexPolynomial(3j).normalize()
        assert q.degree == 0
        assert_close_to(q[0], 1)

        q = ComplexPolynomial(1j, 7).normalize()
        assert q.degree == 1
        assert_close_to(q[1], 1)
        assert_close_to(q[0], -7j)

    def test_moved(self):
        """Test moving changes the constant coefficient only."""
        p = ComplexPolynomial(1, 0, 0)
        q = p.moved(-2)

        assert q == ComplexPolynomial(1, 0, -2)
        assert p == ComplexPolynomial(1, 0, 0)
        assert ComplexPolynomial().moved(5).degree == -1

    def test_trivial_derivatives(self):
        """Test derivatives of empty and constant polynomials are empty."""
        assert ComplexPolynomial().derivative().degree == -1

        for c in some_numbers():
            assert ComplexPolynomial(c).derivative().degree == -1

        for c in some_numbers():
            p = ComplexPolynomial(c, 1).derivative()
            assert p.degree == 0
            assert_close_to(p[0], c)

    def test_derivatives(self):
        """Test formal derivatives."""
        p = ComplexPolynomial(2j, 4 - 1j, -1).derivative()
        assert p.degree == 1
        assert_close_to(p[1], 4j)
        assert_close_to(p[0], 4 - 1j)

        p = ComplexPolynomial(3 + 1j, 2j, 4 - 1j, -1).derivative()
        assert p.degree == 2
        assert_close_to(p[2], 9 + 3j)
        assert_close_to(p[1], 4j)
        assert_close_to(p[0], 4 - 1j)

    def test_trivial_integrals(self):
        """Test integrals of the empty polynomial are constants."""
        p = ComplexPolynomial().integral()
        assert p.degree == 0
        assert_close_to(p[0], 0)

        for c in some_numbers():
            p = ComplexPolynomial().integral(c)
            assert p.degree == 0
            assert_close_to(p[0], c)

    def test_integrals(self):
        """Test antiderivatives with integration constant."""
        p = ComplexPolynomial(2j, 4 - 1j, -1).integral(1 - 2j)

        assert p.degree == 3
        assert_close_to(p[3], 2j / 3)
        assert_close_to(p[2], 2 - 0.5j)
        assert_close_to(p[1], -1)
        assert_close_to(p[0], 1 - 2j)

    @pytest.mark.parametrize("coefficients", [
        (3 + 1j, 2j, 4 - 1j, -1),
        (1, 0, -7, -6),
        (0.5j,),
    ])
    def test_derivative_of_integral_is_identity(self, coefficients):
        """Test differentiation undoes integration."""
        p = ComplexPolynomial(*coefficients)
        q = p.integral(5 + 5j).derivative()

        assert q.degree == p.degree
        for k in range(p.degree + 1):
            assert_close_to(q[k], p[k])


class TestArithmetic:
    """Test multiplication and splitting off zeros."""

    def test_multiply(self):
        """Test (z + 1)(z - 1) = z^2 - 1."""
        p = ComplexPolynomial(1, 1) * ComplexPolynomial(1, -1)

        assert p.degree == 2
        assert_close_to(p[2], 1)
        assert_close_to(p[1], 0)
        assert_close_to(p[0], -1)

    def test_multiply_by_constant(self):
        """Test multiplying by a constant scales every coefficient."""
        p = ComplexPolynomial(1, 2) * ComplexPolynomial(3j)

        assert p.degree == 1
        assert_close_to(p[1], 3j)
        assert_close_to(p[0], 6j)

    def test_multiply_by_empty(self):
        """Test the empty polynomial absorbs products."""
        assert (ComplexPolynomial(1, 2) * ComplexPolynomial()).degree == -1
        assert (ComplexPolynomial() * ComplexPolynomial(1, 2)).degree == -1

    def test_multiply_evaluates_pointwise(self):
        """Test (p * q)(z) = p(z) q(z)."""
        p = ComplexPolynomial(1 + 1j, -2, 0.5j)
        q = ComplexPolynomial(2, 3 - 1j)
        pq = p * q

        for z in some_small_numbers():
            assert_close_to(pq(z), p(z) * q(z), 1e-9)

    def test_split_zero(self):
        """Test dividing z^3 - 7z - 6 by (z - 3)."""
        p = ComplexPolynomial(1, 0, -7, -6).split_zero(3)

        assert p.degree == 2
        assert_close_to(p[2], 1)
        assert_close_to(p[1], 3)
        assert_close_to(p[0], 2)

    def test_split_zero_of_constant(self):
        """Test constants have nothing to split."""
        assert ComplexPolynomial(4).split_zero(1).degree == -1
        assert ComplexPolynomial().split_zero(1).degree == -1

    def test_split_zero_of_from_zeros(self):
        """Test splitting one zero leaves a polynomial with the others."""
        zeros = [1 + 1j, -2, 0.5j]
        p = ComplexPolynomial.from_zeros(zeros).split_zero(zeros[0])

        assert p.degree == 2
        for zero in zeros[1:]:
            assert_close_to(p(zero), 0)

"""Unit tests for the fractal maps and the preimage tree calculator."""

import pytest

from api.src.calculation import ComplexFractal, PolynomialFractal, SquareFractal, calculate
from tests.complex_assertions import assert_close_to, assert_contains, some_small_numbers


class TestSquareFractal:
    """Test the preimages of w^2 + c."""

    def test_default_constant(self):
        """Test c defaults to 1."""
        assert SquareFractal().c == 1
        assert SquareFractal().dimensions == 2

    def test_pre_images_map_back(self):
        """Test every preimage is mapped back onto z."""
        fractal = SquareFractal(0.5 - 0.25j)
        for z in some_small_numbers():
            pre_images = fractal.pre_images(z)

            assert len(pre_images) == 2
            for w in pre_images:
                assert_close_to(w * w + fractal.c, z, 1e-9)

    def test_pre_images_are_opposite(self):
        """Test the two preimages differ in sign only."""
        w1, w2 = SquareFractal(1j).pre_images(3 + 2j)

        assert_close_to(w1, -w2)

    def test_implements_protocol(self):
        """Test SquareFractal satisfies ComplexFractal."""
        assert isinstance(SquareFractal(), ComplexFractal)


class TestPolynomialFractal:
    """Test the preimages of a polynomial map."""

    def test_dimensions_follow_degree(self):
        """Test the branching factor equals the degree."""
        assert PolynomialFractal(1, 0, 0).dimensions == 2
        assert PolynomialFractal(1, 0, 0, 0).dimensions == 3
        assert PolynomialFractal(2, 1).dimensions == 1

    def test_leading_zeros_are_dropped(self):
        """Test leading zero coefficients do not count towards the degree."""
        fractal = PolynomialFractal(0, 1, 1)

        assert fractal.dimensions == 1
        assert fractal.polynomial.coefficients == (1, 1)
        assert_close_to(fractal.pre_images(2)[0], 1)

    def test_zero_padded_constant_is_rejected(self):
        """Test a constant with leading zeros is still rejected."""
        with pytest.raises(ValueError, match="at least 1"):
            PolynomialFractal(0, 0, 5)

    def test_constant_polynomial_is_rejected(self):
        """Test polynomials of degree 0 have no preimages."""
        with pytest.raises(ValueError, match="degree of at least 1"):
            PolynomialFractal(5)

        with pytest.raises(ValueError):
            PolynomialFractal()

    def test_linear_pre_image(self):
        """Test the single preimage of 2w + 1."""
        pre_images = PolynomialFractal(2, 1).pre_images(5)

        assert len(pre_images) == 1
        assert_close_to(pre_images[0], 2)

    def test_square_pre_images(self):
        """Test w^2 has preimages 2 and -2 at 4."""
        pre_images = PolynomialFractal(1, 0, 0).pre_images(4)

        assert_contains(pre_images, 1e-9, 2, -2)

    def test_cubic_pre_images(self):
        """Test every preimage of w^3 at 8 is a cube root of 8."""
        pre_images = PolynomialFractal(1, 0, 0, 0).pre_images(8)

        assert len(pre_images) == 3
        for w in pre_images:
            assert abs(w ** 3 - 8) < 1e-5
        assert_contains(pre_images, 1e-5, 2)

    def test_implements_protocol(self):
        """Test PolynomialFractal satisfies ComplexFractal."""
        assert isinstance(PolynomialFractal(1, 0, 1), ComplexFractal)


class TestCalculate:
    """Test collecting preimage trees."""

    def test_depth_one_is_root_only(self):
        """Test a tree of depth 1 holds only z0."""
        assert calculate(SquareFractal(), 1, 1) == [1]

    @pytest.mark.parametrize("depth,count", [(2, 3), (3, 7), (5, 31), (10, 1023)])
    def test_tree_size(self, depth, count):
        """Test a binary tree of depth n holds 2^n - 1 points."""
        assert len(calculate(SquareFractal(1j), 1, depth)) == count

    def test_polynomial_tree_size(self):
        """Test a ternary tree of depth 3 holds 13 points."""
        assert len(calculate(PolynomialFractal(1, 0, 0, 1), 0.5, 3)) == 13

    def test_pre_order(self):
        """Test every point is followed by the subtree of its first preimage."""
        fractal = SquareFractal(1j)
        numbers = calculate(fractal, 1, 3)

        w1, w2 = fractal.pre_images(1)
        assert numbers[0] == 1
        assert_close_to(numbers[1], w1)
        assert_close_to(numbers[2], fractal.pre_images(w1)[0])
        assert_close_to(numbers[3], fractal.pre_images(w1)[1])
        assert_close_to(numbers[4], w2)

    def test_depth_must_be_positive(self):
        """Test depths below 1 are rejected."""
        with pytest.raises(ValueError, match="at least 1"):
            calculate(SquareFractal(), 1, 0)

    def test_too_many_numbers(self):
        """Test trees exceeding the point limit are rejected."""
        with pytest.raises(ValueError, match=r"\(2048\) exceeds 1024"):
            calculate(SquareFractal(), 1, 11)

    def test_custom_limit(self):
        """Test the point limit can be lowered."""
        with pytest.raises(ValueError, match="exceeds 8"):
            calculate(SquareFractal(), 1, 4, max_numbers=8)

        assert len(calculate(SquareFractal(), 1, 3, max_numbers=8)) == 7

    def test_huge_depth_is_rejected_quickly(self):
        """Test a depth far beyond the limit is rejected without computing 2^n."""
        with pytest.raises(ValueError, match=r"\(2\^20000\) exceeds 1024"):
            calculate(SquareFractal(), 1, 20000)

    def test_linear_depth_beyond_limit(self):
        """Test linear maps cannot ask for more levels than the point limit."""
        with pytest.raises(ValueError, match=r"at least 2000\) exceeds 1024"):
            calculate(PolynomialFractal(2, 1), 1, 2000)

    def test_linear_chain_is_not_recursive(self):
        """Test a chain of 1000 levels is collected without hitting the recursion limit."""
        numbers = calculate(PolynomialFractal(1, 1), 0, 1000)

        assert len(numbers) == 1000
        assert numbers[:3] == [0, -1, -2]
        assert numbers[-1] == -999

"""Fractals defined by the preimages of a complex map."""

import cmath
import itertools
from typing import List, Protocol, runtime_checkable

from shared.complex_math import ComplexPolynomial, solve_all

PREIMAGE_EPS2 = 1e-15


@runtime_checkable
class ComplexFractal(Protocol):
    """A complex map ``f`` that can be run backwards.

    ``dimensions`` is the number of preimages every point has, i.e. the
    branching factor of the preimage tree.
    """

    @property
    def dimensions(self) -> int:
        ...

    def pre_images(self, z: complex) -> List[complex]:
        ...


class SquareFractal:
    """Julia type fractal of ``f(w) = w^2 + c``."""

    def __init__(self, c: complex = complex(1.0, 0.0)) -> None:
        self.c = complex(c)

    @property
    def dimensions(self) -> int:
        return 2

    def pre_images(self, z: complex) -> List[complex]:
        w = cmath.sqrt(z - self.c)
        return [w, -w]

    def __repr__(self) -> str:
        return f"SquareFractal(c={self.c!r})"


class PolynomialFractal:
    """Fractal of ``f(w) = p(w)`` for an arbitrary polynomial ``p``.

    Args:
        *coefficients: Coefficients of ``p``, highest order first. Leading
            zeros are dropped.
    """

    def __init__(self, *coefficients: complex) -> None:
        significant = itertools.dropwhile(lambda c: complex(c) == 0, coefficients)
        self.polynomial = ComplexPolynomial(*significant)
        if self.polynomial.degree < 1:
            raise ValueError(
                f"Polynomial fractal needs a degree of at least 1, got {self.polynomial.degree}."
            )

    @property
    def dimensions(self) -> int:
        return self.polynomial.degree

    def pre_images(self, z: complex) -> List[complex]:
        q = self.polynomial.moved(-z)
        return [zero.value for zero in solve_all(q, None, PREIMAGE_EPS2)]

    def __repr__(self) -> str:
        return f"PolynomialFractal({self.polynomial.coefficients!r})"

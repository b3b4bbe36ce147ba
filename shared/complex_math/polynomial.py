"""Complex polynomials.

Coefficients are stored highest order first, the way polynomials are
usually written down: ``ComplexPolynomial(1, 0, -2)`` is ``z^2 - 2``.
Instances are immutable; every operation returns a new polynomial.
"""

from dataclasses import dataclass
from typing import Iterable, List, Tuple


@dataclass(frozen=True)
class Zero:
    """A zero of a polynomial together with its multiplicity."""

    value: complex
    quantity: int = 1


class ComplexPolynomial:
    """Polynomial with complex coefficients.

    Without coefficients the polynomial is empty. The empty polynomial has
    degree ``-1``, evaluates to ``0`` everywhere and is what derivatives of
    constants and quotients of constants come out as.

    The leading coefficient should not be zero when two or more
    coefficients are given.
    """

    __slots__ = ("_coefficients",)

    def __init__(self, *coefficients: complex) -> None:
        self._coefficients: Tuple[complex, ...] = tuple(complex(c) for c in coefficients)

    @classmethod
    def _from_powers(cls, powers: List[complex]) -> "ComplexPolynomial":
        # powers[k] is the coefficient of z^k
        return cls(*reversed(powers))

    @classmethod
    def one(cls) -> "ComplexPolynomial":
        return cls(1)

    @classmethod
    def from_zeros(cls, zeros: Iterable[complex]) -> "ComplexPolynomial":
        """Build the monic polynomial ``(z - z_1) * ... * (z - z_n)``."""
        p = cls.one()
        for zero in zeros:
            p = p * cls(1, -complex(zero))
        return p

    @property
    def degree(self) -> int:
        return len(self._coefficients) - 1

    @property
    def coefficients(self) -> Tuple[complex, ...]:
        """Coefficients, highest order first."""
        return self._coefficients

    def __getitem__(self, power: int) -> complex:
        n = self.degree
        if 0 <= power <= n:
            return self._coefficients[n - power]
        return complex(0.0, 0.0)

    def __call__(self, z: complex) -> complex:
        s = complex(0.0, 0.0)
        for c in self._coefficients:
            s = s * z + c
        return s

    def __mul__(self, other: "ComplexPolynomial") -> "ComplexPolynomial":
        if not isinstance(other, ComplexPolynomial):
            return NotImplemented

        n = self.degree
        m = other.degree
        if n < 0:
            return self
        if m < 0:
            return other

        product = [complex(0.0, 0.0)] * (n + m + 1)
        for i in range(n + 1):
            a = self[i]
            for j in range(m + 1):
                product[i + j] += a * other[j]

        return self._from_powers(product)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ComplexPolynomial):
            return NotImplemented
        return self._coefficients == other._coefficients

    def __hash__(self) -> int:
        return hash(self._coefficients)

    def __len__(self) -> int:
        return len(self._coefficients)

    def __repr__(self) -> str:
        return f"ComplexPolynomial{self._coefficients!r}"

    def normalize(self) -> "ComplexPolynomial":
        """Divide by the leading coefficient so the result is monic."""
        n = self.degree
        if n < 0:
            return self

        lead = self[n]
        powers = [self[k] / lead for k in range(n)]
        powers.append(complex(1.0, 0.0))
        return self._from_powers(powers)

    def moved(self, w: complex) -> "ComplexPolynomial":
        """Add ``w`` to the constant coefficient."""
        if self.degree < 0:
            return self

        powers = [self[k] for k in range(self.degree + 1)]
        powers[0] += w
        return self._from_powers(powers)

    def derivative(self) -> "ComplexPolynomial":
        """Formal derivative; constants and the empty polynomial give the empty polynomial."""
        n = self.degree
        if n <= 0:
            return ComplexPolynomial()

        return self._from_powers([self[k] * k for k in range(1, n + 1)])

    def integral(self, c: complex = 0) -> "ComplexPolynomial":
        """Antiderivative with integration constant ``c``."""
        powers = [complex(c)]
        powers.extend(self[k] / (k + 1) for k in range(self.degree + 1))
        return self._from_powers(powers)

    def split_zero(self, eta: complex) -> "ComplexPolynomial":
        """Divide by ``(z - eta)`` using synthetic division.

        ``eta`` is expected to be a zero; the remainder is discarded.
        """
        n = self.degree
        if n <= 0:
            return ComplexPolynomial()

        powers = [complex(0.0, 0.0)] * n
        carry = complex(0.0, 0.0)
        for k in range(n - 1, -1, -1):
            carry += self[k + 1]
            powers[k] = carry
            carry *= eta

        return self._from_powers(powers)

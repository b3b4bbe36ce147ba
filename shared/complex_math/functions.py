"""Complex functions missing from :mod:`cmath`."""

import cmath
import math


def safe_div(z: complex, w: complex) -> complex:
    """Divide ``z`` by ``w`` without raising on a zero divisor.

    A zero divisor divides real and imaginary part separately by ``0.0``,
    which gives ``inf`` for non-zero parts and ``nan`` for zero parts.
    """
    if w != 0:
        return z / w

    def _part(x: float) -> float:
        if x == 0.0 or math.isnan(x):
            return math.nan
        return math.copysign(math.inf, x)

    return complex(_part(z.real), _part(z.imag))


def ipow(z: complex, n: int) -> complex:
    """Integer power computed in polar form.

    Args:
        z: Base
        n: Exponent, may be negative

    Returns:
        ``z ** n``
    """
    if n == 0:
        return complex(1.0, 0.0)
    if n < 0:
        return safe_div(complex(1.0, 0.0), ipow(z, -n))
    if n == 1:
        return z

    r, phi = cmath.polar(z)
    return cmath.rect(r ** n, phi * n)


def cot(z: complex) -> complex:
    return safe_div(cmath.cos(z), cmath.sin(z))


def acot(z: complex) -> complex:
    return complex(math.pi / 2, 0.0) - cmath.atan(z)


def coth(z: complex) -> complex:
    return safe_div(cmath.cosh(z), cmath.sinh(z))


def acoth(z: complex) -> complex:
    return 0.5 * cmath.log(safe_div(z + 1, z - 1))


def close_to(z: complex, w: complex, eps: float) -> bool:
    """Check whether ``w`` lies in the open ``eps`` disc around ``z``."""
    d = z - w
    return d.real * d.real + d.imag * d.imag < eps * eps

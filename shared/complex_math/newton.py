"""Zeros of complex polynomials by Newton's method."""

import cmath
from typing import List, Optional

from .functions import safe_div
from .polynomial import ComplexPolynomial, Zero

DEFAULT_MAX_ITERATIONS = 10_000

# Applied to the iterate when the derivative vanishes there.
_NUDGE = complex(1e-3, 1e-3)


class ConvergenceError(ArithmeticError):
    """Raised when Newton's method does not reach the requested precision."""


def solve(
    p: ComplexPolynomial,
    z0: complex,
    eps2: float,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> complex:
    """Find one zero of ``p`` starting at ``z0``.

    Args:
        p: Polynomial of degree 2 or more
        z0: Start value, ideally close to a zero
        eps2: Square of the accepted distance of ``p(z)`` from 0
        max_iterations: Upper bound on Newton steps

    Returns:
        A ``z`` with ``|p(z)|^2 <= eps2``

    Raises:
        ValueError: Degree below 2 or non-positive ``eps2``
        ConvergenceError: No zero found within ``max_iterations``
    """
    if p.degree <= 1:
        raise ValueError("Degree of polynomial must be at least 2.")
    if eps2 <= 0.0:
        raise ValueError("eps2 must be positive.")

    pd = p.derivative()
    z = complex(z0)

    for _ in range(max_iterations):
        w = p(z)
        if w.real * w.real + w.imag * w.imag <= eps2:
            return z

        d = pd(z)
        if d == 0:
            z += _NUDGE
            continue

        step = safe_div(w, d)
        if z - step == z:
            # machine precision reached
            return z

        z = z - step
        if not cmath.isfinite(z):
            raise ConvergenceError(f"Newton iteration diverged for {p!r} starting at {z0!r}.")

    raise ConvergenceError(
        f"No zero of {p!r} found within {max_iterations} iterations starting at {z0!r}."
    )


def solve_all(
    p: ComplexPolynomial,
    z0: Optional[complex] = None,
    eps2: float = 1e-15,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> List[Zero]:
    """Find all zeros of ``p``, one :class:`Zero` per root counted with multiplicity.

    Linear and quadratic polynomials are solved in closed form. Higher
    degrees find one zero with :func:`solve`, split it off and continue
    with the quotient, seeded with the zero just found.
    """
    if eps2 <= 0.0:
        raise ValueError("eps2 must be positive.")

    if z0 is None:
        z0 = complex(0.0, 0.0)

    n = p.degree

    if n <= 0:
        return []

    if n == 1:
        return [Zero(-safe_div(p[0], p[1]))]

    if n == 2:
        pn = p.normalize()
        half = pn[1] * 0.5
        dis = cmath.sqrt(half * half - pn[0])
        return [Zero(-half + dis), Zero(-half - dis)]

    eta = solve(p, z0, eps2, max_iterations)
    return [Zero(eta)] + solve_all(p.split_zero(eta), eta, eps2, max_iterations)

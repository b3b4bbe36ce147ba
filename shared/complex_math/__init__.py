"""Complex number utilities, polynomials and Newton's method."""

from .functions import acot, acoth, close_to, cot, coth, ipow, safe_div
from .newton import ConvergenceError, solve, solve_all
from .polynomial import ComplexPolynomial, Zero

__all__ = [
    "ComplexPolynomial",
    "Zero",
    "ConvergenceError",
    "solve",
    "solve_all",
    "acot",
    "acoth",
    "close_to",
    "cot",
    "coth",
    "ipow",
    "safe_div",
]

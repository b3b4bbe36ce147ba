"""Fractal point calculation.

Provides the fractal maps, the preimage tree calculator and the
backtrace tree used by the image endpoints.
"""

from api.src.calculation.backtrace import ExtendedComplex, backtrace, check_size
from api.src.calculation.calculator import calculate
from api.src.calculation.fractals import ComplexFractal, PolynomialFractal, SquareFractal

__all__ = [
    "ComplexFractal",
    "ExtendedComplex",
    "PolynomialFractal",
    "SquareFractal",
    "backtrace",
    "calculate",
    "check_size",
]

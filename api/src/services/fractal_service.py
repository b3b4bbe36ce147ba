"""
Fractal image service.

Orchestrates point calculation and rendering for the image endpoints and
records the fractal metrics. Calculation errors propagate to the caller;
the exception handlers in ``main`` turn them into HTTP responses.
"""

import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Sequence

import structlog

from api.src.calculation import (
    PolynomialFractal,
    SquareFractal,
    backtrace,
    calculate,
    check_size,
)
from api.src.config import Settings
from api.src.services.fractal_renderer import as_bytes, create_image
from shared.complex_math import ConvergenceError
from shared.metrics import FractalMetrics

logger = structlog.get_logger(__name__)


class SampleImageNotFound(FileNotFoundError):
    """The configured sample image does not exist."""


class FractalService:
    """Calculates fractal point clouds and renders them as images."""

    def __init__(self, settings: Settings, metrics: FractalMetrics):
        self.settings = settings
        self.metrics = metrics

    @contextmanager
    def _observe(self, fractal: str) -> Iterator[None]:
        start_time = time.perf_counter()
        try:
            yield
        except (ValueError, ConvergenceError) as e:
            self.metrics.calculation_errors.labels(
                fractal=fractal,
                error_type=type(e).__name__
            ).inc()
            logger.warning("fractal_calculation_rejected", fractal=fractal, error=str(e))
            raise
        else:
            self.metrics.render_duration.labels(fractal=fractal).observe(
                time.perf_counter() - start_time
            )

    def _render(self, fractal: str, numbers: Sequence[complex]) -> bytes:
        self.metrics.points_calculated.labels(fractal=fractal).inc(len(numbers))

        image = create_image(numbers, width=self.settings.image_width)
        data = as_bytes(image, "png")

        self.metrics.image_bytes.labels(fractal=fractal).observe(len(data))
        logger.info(
            "fractal_rendered",
            fractal=fractal,
            points=len(numbers),
            size=len(data)
        )
        return data

    def square_png(self, n: int, c0: complex, z0: complex) -> bytes:
        """
        Render the preimage tree of ``z0`` under ``w^2 + c0``.

        Args:
            n: Tree depth
            c0: Constant of the square map
            z0: Root of the tree

        Returns:
            PNG bytes
        """
        with self._observe("square"):
            fractal = SquareFractal(c0)
            logger.debug("square_fractal_requested", c0=str(c0), z0=str(z0), depth=n)
            numbers = calculate(fractal, z0, n, self.settings.max_tree_numbers)
            return self._render("square", numbers)

    def polynomial_png(self, coefficients: List[complex], z0: complex, n: int) -> bytes:
        """
        Render the preimage tree of ``z0`` under a polynomial map.

        Args:
            coefficients: Polynomial coefficients, highest order first
            z0: Root of the tree
            n: Tree depth

        Returns:
            PNG bytes
        """
        with self._observe("polynomial"):
            fractal = PolynomialFractal(*coefficients)
            numbers = calculate(fractal, z0, n, self.settings.max_tree_numbers)
            return self._render("polynomial", numbers)

    def backtrace_png(self, imax: int, spread: int) -> bytes:
        """
        Render a backtrace tree.

        Args:
            imax: Number of levels
            spread: Children per node

        Returns:
            PNG bytes
        """
        with self._observe("backtrace"):
            check_size(imax, spread, self.settings.max_backtrace_values)
            nodes = backtrace(imax, spread)
            return self._render("backtrace", [node.number for node in nodes])

    def sample_png(self) -> bytes:
        """Read the configured sample image."""
        path = Path(self.settings.sample_image_path)
        if not path.is_file():
            logger.warning("sample_image_missing", path=str(path))
            raise SampleImageNotFound(f"{path} not found.")
        return path.read_bytes()

"""Prometheus metrics definitions and helpers.

Provides the HTTP and fractal calculation metrics of the service.
"""

from typing import Callable

from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    generate_latest,
    REGISTRY,
    CollectorRegistry,
)


class HttpMetrics:
    """HTTP request metrics."""

    def __init__(self, registry: CollectorRegistry = REGISTRY) -> None:
        """Initialize HTTP metrics.

        Args:
            registry: Prometheus registry to use
        """
        self.requests_total = Counter(
            "http_requests_total",
            "Total HTTP requests",
            ["method", "endpoint", "status"],
            registry=registry,
        )

        self.request_duration = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["method", "endpoint"],
            registry=registry,
        )

        self.requests_in_progress = Gauge(
            "http_requests_in_progress",
            "HTTP requests currently in progress",
            ["method"],
            registry=registry,
        )


class FractalMetrics:
    """Fractal calculation and rendering metrics."""

    def __init__(self, registry: CollectorRegistry = REGISTRY) -> None:
        """Initialize fractal metrics.

        Args:
            registry: Prometheus registry to use
        """
        # Points produced per fractal kind
        self.points_calculated = Counter(
            "fractal_points_calculated_total",
            "Total number of complex points calculated",
            ["fractal"],
            registry=registry,
        )

        # Calculation + drawing + encoding
        self.render_duration = Histogram(
            "fractal_render_duration_seconds",
            "Time spent calculating and rendering a fractal image",
            ["fractal"],
            buckets=[0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
            registry=registry,
        )

        # Rejected or failed calculations
        self.calculation_errors = Counter(
            "fractal_calculation_errors_total",
            "Total number of fractal calculations that failed",
            ["fractal", "error_type"],
            registry=registry,
        )

        self.image_bytes = Histogram(
            "fractal_image_size_bytes",
            "Size of the encoded fractal images",
            ["fractal"],
            buckets=[1_000, 5_000, 10_000, 50_000, 100_000, 500_000, 1_000_000],
            registry=registry,
        )


def setup_metrics(registry: CollectorRegistry = REGISTRY) -> tuple[HttpMetrics, FractalMetrics]:
    """Setup and return metric instances.

    Args:
        registry: Prometheus registry to register the metrics with

    Returns:
        Tuple of (HttpMetrics, FractalMetrics)
    """
    return HttpMetrics(registry), FractalMetrics(registry)


def get_metrics_handler(registry: CollectorRegistry = REGISTRY) -> Callable[[], bytes]:
    """Get metrics handler for HTTP endpoint.

    Returns:
        Function that generates Prometheus metrics output
    """

    def metrics_handler() -> bytes:
        return generate_latest(registry)

    return metrics_handler

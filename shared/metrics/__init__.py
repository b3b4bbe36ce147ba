"""Metrics module using Prometheus."""

from .prometheus_metrics import (
    FractalMetrics,
    HttpMetrics,
    setup_metrics,
    get_metrics_handler,
)

__all__ = [
    "FractalMetrics",
    "HttpMetrics",
    "setup_metrics",
    "get_metrics_handler",
]

"""
FastAPI dependency injection for settings, metrics and services.

Provides injectable dependencies for:
- Application settings
- Prometheus metric collections (created once per process)
- The fractal image service

All dependencies use FastAPI's dependency injection system and can be
replaced in tests through ``app.dependency_overrides``.
"""

from typing import Optional

import structlog
from fastapi import Depends

from api.src.config import Settings, get_settings
from api.src.services.fractal_service import FractalService
from shared.metrics import FractalMetrics, HttpMetrics, setup_metrics

logger = structlog.get_logger(__name__)


# ============================================================================
# METRICS
# ============================================================================

_http_metrics: Optional[HttpMetrics] = None
_fractal_metrics: Optional[FractalMetrics] = None


def _init_metrics() -> None:
    global _http_metrics, _fractal_metrics

    if _http_metrics is None:
        _http_metrics, _fractal_metrics = setup_metrics()
        logger.debug("metrics_registered")


def get_http_metrics() -> HttpMetrics:
    """
    Get the process wide HTTP metrics.

    Returns:
        HttpMetrics registered with the default registry
    """
    _init_metrics()
    return _http_metrics


def get_fractal_metrics() -> FractalMetrics:
    """
    Get the process wide fractal metrics.

    Returns:
        FractalMetrics registered with the default registry
    """
    _init_metrics()
    return _fractal_metrics


# ============================================================================
# SERVICES
# ============================================================================


def get_fractal_service(
    settings: Settings = Depends(get_settings),
    metrics: FractalMetrics = Depends(get_fractal_metrics),
) -> FractalService:
    """
    Get fractal service instance.

    Args:
        settings: Application settings
        metrics: Fractal metrics

    Returns:
        FractalService instance
    """
    return FractalService(settings, metrics)

"""
Management endpoints: health, readiness, build info and Prometheus metrics.

Mounted under the configurable management prefix (``/actuator`` by default).
"""

import platform
import time

import structlog
from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse, PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST

from api.src.calculation import SquareFractal, calculate
from api.src.config import Settings, get_settings
from api.src.models.responses import HealthResponse, ReadinessResponse
from api.src.services.fractal_renderer import as_bytes, create_image
from shared.complex_math import ComplexPolynomial, solve_all
from shared.metrics import get_metrics_handler
from shared.models import HealthStatus, ServiceInfo

logger = structlog.get_logger(__name__)

STARTED_AT = time.monotonic()

router = APIRouter(tags=["Management"])


def _check_calculation() -> HealthStatus:
    numbers = calculate(SquareFractal(complex(0.0, 1.0)), complex(1.0, 0.0), 3)
    zeros = solve_all(ComplexPolynomial(1, 0, 0, -1), None, 1e-12)
    if len(numbers) == 7 and len(zeros) == 3:
        return HealthStatus.HEALTHY
    return HealthStatus.DEGRADED


def _check_rendering() -> HealthStatus:
    data = as_bytes(create_image([complex(1.0, 1.0), complex(-1.0, -1.0)], width=16))
    return HealthStatus.HEALTHY if data.startswith(b"\x89PNG") else HealthStatus.DEGRADED


READINESS_CHECKS = {
    "calculation": _check_calculation,
    "rendering": _check_rendering,
}


@router.get("/health", response_model=HealthResponse)
def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """
    Health check endpoint.

    Returns basic health status without running any checks.
    Use for container health checks.
    """
    return HealthResponse(
        status=HealthStatus.HEALTHY,
        service=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )


@router.get("/ready", response_model=ReadinessResponse)
def readiness_check(settings: Settings = Depends(get_settings)) -> JSONResponse:
    """
    Readiness check endpoint.

    Runs a tiny calculation and rendering round to verify the numerical
    and imaging stack work.

    Returns:
        Readiness status with component health, 503 if any check fails
    """
    checks = {}
    for name, check in READINESS_CHECKS.items():
        try:
            checks[name] = check()
        except Exception as e:
            logger.error("readiness_check_failed", check=name, error=str(e))
            checks[name] = HealthStatus.UNHEALTHY

    all_healthy = all(result == HealthStatus.HEALTHY for result in checks.values())

    body = ReadinessResponse(
        status="ready" if all_healthy else "not_ready",
        service=settings.app_name,
        version=settings.app_version,
        checks=checks,
    )

    return JSONResponse(
        status_code=status.HTTP_200_OK if all_healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=body.model_dump(),
    )


@router.get("/info", response_model=ServiceInfo)
def info(settings: Settings = Depends(get_settings)) -> ServiceInfo:
    """Build and runtime information."""
    return ServiceInfo(
        service_name=settings.app_name,
        version=settings.app_version,
        group=settings.app_group,
        status=HealthStatus.HEALTHY,
        uptime_seconds=time.monotonic() - STARTED_AT,
        dependencies={},
        python_version=platform.python_version(),
    )


@router.get("/metrics", response_class=PlainTextResponse)
def metrics(settings: Settings = Depends(get_settings)) -> Response:
    """
    Prometheus metrics endpoint.

    Exposes application metrics in Prometheus format for scraping.
    """
    if not settings.metrics_enabled:
        return PlainTextResponse("metrics disabled", status_code=status.HTTP_404_NOT_FOUND)

    return Response(
        content=get_metrics_handler()(),
        media_type=CONTENT_TYPE_LATEST
    )

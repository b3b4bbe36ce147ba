"""
Fractal Music HTTP service.

Assembles the FastAPI application from its routers:
- ``/fractal-music``: square, polynomial and sample images
- ``/btm``: backtrace images
- management prefix (``/actuator``): health, readiness, info, metrics

Calculation errors surface as JSON error bodies: rejected parameters give
400, zeros that could not be found give 422.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import structlog
import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.src.config import Settings, get_settings
from api.src.dependencies import get_http_metrics
from api.src.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from api.src.routers import backtrace, fractal_music, management
from shared.complex_math import ConvergenceError
from shared.logging import configure_logging
from shared.tracing import configure_tracing, shutdown_tracing

logger = structlog.get_logger(__name__)


def _error_response(status_code: int, detail) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": detail})


# ============================================================================
# Exception Handlers
# ============================================================================


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Query parameters of the wrong type."""
    errors = jsonable_encoder(exc.errors())
    logger.warning("validation_error", path=request.url.path, errors=errors)
    return _error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, errors)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.warning(
        "http_exception",
        path=request.url.path,
        status_code=exc.status_code,
        detail=exc.detail
    )
    return _error_response(exc.status_code, exc.detail)


async def convergence_exception_handler(request: Request, exc: ConvergenceError) -> JSONResponse:
    """Newton's method gave up on a zero."""
    logger.warning("convergence_error", path=request.url.path, error=str(exc))
    return _error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, str(exc))


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Parameters outside what the calculation accepts."""
    logger.warning("calculation_rejected", path=request.url.path, error=str(exc))
    return _error_response(status.HTTP_400_BAD_REQUEST, str(exc))


async def unexpected_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unexpected_exception",
        path=request.url.path,
        error=str(exc),
        exc_info=True
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


EXCEPTION_HANDLERS = [
    (RequestValidationError, validation_exception_handler),
    (StarletteHTTPException, http_exception_handler),
    (ConvergenceError, convergence_exception_handler),
    (ValueError, value_error_handler),
    (Exception, unexpected_exception_handler),
]


# ============================================================================
# Application Factory
# ============================================================================


def _lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        if settings.tracing_enabled:
            configure_tracing(
                service_name=settings.app_name,
                service_version=settings.app_version,
                otlp_endpoint=settings.tracing_otlp_endpoint,
                sampling_rate=settings.tracing_sample_rate,
            )
            logger.info("tracing_enabled", endpoint=settings.tracing_otlp_endpoint)

        logger.info(
            "application_started",
            version=settings.app_version,
            environment=settings.environment,
            management_prefix=settings.management_prefix
        )
        try:
            yield
        finally:
            if settings.tracing_enabled:
                shutdown_tracing()
            logger.info("application_stopped")

    return lifespan


def _add_middleware(app: FastAPI, settings: Settings) -> None:
    # Added last runs first: security headers wrap logging, logging wraps CORS
    if settings.cors_enabled:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_methods=settings.cors_allow_methods,
            allow_headers=settings.cors_allow_headers,
        )

    app.add_middleware(
        RequestLoggingMiddleware,
        metrics=get_http_metrics(),
        skip_prefix=settings.management_prefix,
    )

    if settings.security_headers_enabled:
        app.add_middleware(
            SecurityHeadersMiddleware,
            require_https=settings.security_require_https,
            hsts_max_age=settings.security_hsts_max_age,
        )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to use, the cached settings by default

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    configure_logging(
        log_level=settings.log_level,
        json_logs=settings.json_logs,
        service_name=settings.app_name,
        environment=settings.environment,
    )

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Renders preimage trees of complex maps and backtrace trees as PNG images.",
        lifespan=_lifespan(settings),
        debug=settings.debug,
    )

    _add_middleware(app, settings)

    for exc_class, handler in EXCEPTION_HANDLERS:
        app.add_exception_handler(exc_class, handler)

    app.include_router(fractal_music.router)
    app.include_router(backtrace.router)
    app.include_router(management.router, prefix=settings.management_prefix)

    if settings.tracing_enabled:
        FastAPIInstrumentor.instrument_app(app)

    return app


app = create_app()


def run() -> None:
    """Serve ``app`` with Uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "api.src.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        log_config=None,
        access_log=False,
    )


if __name__ == "__main__":
    run()

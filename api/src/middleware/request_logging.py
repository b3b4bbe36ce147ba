"""
Request logging and metrics middleware.

Logs every request as a pair of structured events, maintains the HTTP
Prometheus metrics and propagates an ``X-Correlation-ID`` header.
"""

import time
import uuid
from typing import Optional

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.types import ASGIApp

from shared.logging import bind_context, clear_context
from shared.metrics import HttpMetrics

logger = structlog.get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request logging and metrics."""

    def __init__(self, app: ASGIApp, metrics: HttpMetrics, skip_prefix: Optional[str] = None):
        super().__init__(app)
        self.metrics = metrics
        self.skip_prefix = skip_prefix

    def _endpoint(self, request: Request) -> str:
        # Route templates keep the label cardinality bounded
        route = request.scope.get("route")
        return getattr(route, "path", None) or request.url.path

    def _record(self, request: Request, status_code: int, duration: float) -> None:
        endpoint = self._endpoint(request)
        self.metrics.requests_total.labels(
            method=request.method,
            endpoint=endpoint,
            status=status_code
        ).inc()
        self.metrics.request_duration.labels(
            method=request.method,
            endpoint=endpoint
        ).observe(duration)

    async def dispatch(self, request: Request, call_next):
        """Process request and log details."""
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())

        method = request.method
        path = request.url.path
        client_ip = request.client.host if request.client else "unknown"
        quiet = self.skip_prefix is not None and path.startswith(self.skip_prefix)

        clear_context()
        bind_context(correlation_id=correlation_id)

        self.metrics.requests_in_progress.labels(method=method).inc()
        start_time = time.perf_counter()

        if not quiet:
            logger.info(
                "request_started",
                method=method,
                path=path,
                client_ip=client_ip
            )

        try:
            response = await call_next(request)
            duration = time.perf_counter() - start_time
            self._record(request, response.status_code, duration)

            if not quiet:
                logger.info(
                    "request_completed",
                    method=method,
                    path=path,
                    status_code=response.status_code,
                    duration=f"{duration:.3f}s"
                )

            response.headers[CORRELATION_HEADER] = correlation_id
            return response

        except Exception as e:
            duration = time.perf_counter() - start_time
            # The server answers 500 once the exception leaves the app
            self._record(request, 500, duration)
            logger.error(
                "request_failed",
                method=method,
                path=path,
                error=str(e),
                duration=f"{duration:.3f}s",
                exc_info=True
            )
            raise

        finally:
            self.metrics.requests_in_progress.labels(method=method).dec()
            clear_context()

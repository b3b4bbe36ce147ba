"""FastAPI middleware components.

This package contains custom middleware for request logging, metrics
and response security headers.
"""

from api.src.middleware.request_logging import CORRELATION_HEADER, RequestLoggingMiddleware
from api.src.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "CORRELATION_HEADER",
    "RequestLoggingMiddleware",
    "SecurityHeadersMiddleware",
]

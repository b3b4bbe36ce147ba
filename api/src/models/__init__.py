"""Data models for the FastAPI service.

This package contains Pydantic models for response validation and
documentation of the JSON endpoints.
"""

from api.src.models.responses import ErrorResponse, HealthResponse, ReadinessResponse

__all__ = ["ErrorResponse", "HealthResponse", "ReadinessResponse"]

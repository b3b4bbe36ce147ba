"""
Response schemas of the JSON endpoints.

Image endpoints return raw bytes; everything else, including errors,
returns one of the models below.
"""

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field

from shared.models import HealthStatus


class ErrorResponse(BaseModel):
    """Error response schema."""

    detail: str = Field(..., min_length=1)


class HealthResponse(BaseModel):
    """Liveness response."""

    status: HealthStatus = Field(..., description="Overall health")
    service: str = Field(..., description="Service name")
    version: str = Field(..., description="Service version")
    environment: str = Field(..., description="Deployment environment")

    model_config = ConfigDict(use_enum_values=True)


class ReadinessResponse(BaseModel):
    """Readiness response with the result of every self check."""

    status: str = Field(..., pattern=r"^(ready|not_ready)$")
    service: str
    version: str
    checks: Dict[str, HealthStatus] = Field(default_factory=dict)

    model_config = ConfigDict(use_enum_values=True)

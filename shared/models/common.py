"""Pydantic models used by the management endpoints."""

from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class HealthStatus(str, Enum):
    """Result of a health or readiness check."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    DEGRADED = "degraded"


class ServiceInfo(BaseModel):
    """Build and runtime information reported by the info endpoint."""

    service_name: str = Field(..., description="Service name")
    version: str = Field(..., description="Service version")
    group: str = Field(..., description="Organisation the service is published under")
    status: HealthStatus = Field(..., description="Service health status")
    uptime_seconds: float = Field(..., description="Service uptime in seconds", ge=0.0)
    dependencies: Dict[str, HealthStatus] = Field(
        default_factory=dict, description="Dependency health status"
    )
    python_version: Optional[str] = Field(None, description="Interpreter version")

    model_config = ConfigDict(use_enum_values=True)

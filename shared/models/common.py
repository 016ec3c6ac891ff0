"""Common Pydantic models shared across services."""

from enum import Enum
from typing import Dict

from pydantic import BaseModel, Field


class HealthStatus(str, Enum):
    """Health status enum."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    DEGRADED = "degraded"


class ServiceInfo(BaseModel):
    """Service information model."""

    service_name: str = Field(..., description="Service name")
    version: str = Field(..., description="Service version")
    environment: str = Field(..., description="Deployment environment")
    status: HealthStatus = Field(..., description="Service health status")

    model_config = {
        "use_enum_values": True
    }


class ReadinessReport(BaseModel):
    """Readiness check result with per-dependency status."""

    service_name: str = Field(..., description="Service name")
    version: str = Field(..., description="Service version")
    ready: bool = Field(..., description="Whether every dependency is healthy")
    checks: Dict[str, HealthStatus] = Field(
        default_factory=dict, description="Dependency health status"
    )

    model_config = {
        "use_enum_values": True
    }

    @classmethod
    def from_checks(cls, service_name: str, version: str, checks: Dict[str, HealthStatus]) -> "ReadinessReport":
        """Build a report, ready only when every check is healthy."""
        return cls(
            service_name=service_name,
            version=version,
            ready=all(status == HealthStatus.HEALTHY for status in checks.values()),
            checks=checks,
        )

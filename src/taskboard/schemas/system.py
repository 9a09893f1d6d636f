"""Common system-level response models."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from ..models import utcnow
from .base import CamelModel


class MetadataResponse(CamelModel):
    """Metadata payload returned by the metadata endpoint."""

    name: str = Field(description="Human-friendly service name")
    environment: str = Field(description="Deployment environment identifier")
    version: str = Field(description="Semantic version of the service")
    api_prefix: str = Field(description="Base path for API routes")


class HealthCheckResponse(CamelModel):
    """Payload returned by the health check endpoint."""

    status: str = Field(default="ok", description="Service health indicator")
    timestamp: datetime = Field(default_factory=utcnow, description="Server time in UTC")


__all__ = ["HealthCheckResponse", "MetadataResponse"]

"""Health and metadata routes."""

from __future__ import annotations

from fastapi import APIRouter

from ...deps import SettingsDependency
from ...schemas import HealthCheckResponse, MetadataResponse

router = APIRouter(tags=["system"])
api_health_router = APIRouter(tags=["system"])


@router.get("/healthz", response_model=HealthCheckResponse, summary="Liveness probe")
@api_health_router.get("/health", response_model=HealthCheckResponse, summary="Service health")
async def healthcheck() -> HealthCheckResponse:
    return HealthCheckResponse()


@router.get("/api/metadata", response_model=MetadataResponse, summary="Service metadata")
async def read_api_metadata(settings: SettingsDependency) -> MetadataResponse:
    """Expose minimal service metadata for API clients."""

    return MetadataResponse(
        name=settings.project_name,
        environment=settings.environment,
        version=settings.version,
        api_prefix=settings.router_prefix,
    )

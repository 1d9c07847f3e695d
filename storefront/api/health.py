"""Health check endpoints.

Provides endpoints for monitoring service health and readiness.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from storefront.api.dependencies import SettingsDep, get_catalog_repository
from storefront.catalog.repository import CatalogRepository
from storefront.domain.exceptions import PersistenceError

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    service: str
    version: str


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: SettingsDep) -> HealthResponse:
    """Check service health.

    Returns:
        Health status with service name and version.
    """
    return HealthResponse(
        status="healthy",
        service="storefront-api",
        version=settings.api_version,
    )


@router.get("/ready")
async def readiness_check(
    catalog: Annotated[CatalogRepository, Depends(get_catalog_repository)],
) -> JSONResponse:
    """Check the catalog store is reachable.

    Returns:
        Readiness status; 503 when the catalog store is down.
    """
    try:
        await catalog.ping()
    except PersistenceError as e:
        return JSONResponse(
            status_code=503,
            content={"status": "unavailable", "reason": e.message},
        )
    return JSONResponse(content={"status": "ready"})

"""Request-scoped dependency wiring.

Every request gets its own repository, object store gateways and
service. Settings are read per request; database sessions are opened
for the request and closed when it finishes, whatever the outcome.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.catalog.repository import (
    CatalogRepository,
    SqlCatalogRepository,
    get_memory_catalog_repository,
)
from storefront.catalog.service import ProductService
from storefront.domain.exceptions import ConfigurationError
from storefront.infrastructure.config import Settings, get_settings
from storefront.infrastructure.database import session_scope
from storefront.storage.gateway import ObjectStore
from storefront.storage.memory import get_memory_object_store
from storefront.storage.s3 import S3ObjectStore
from storefront.subscriptions.repository import (
    SqlSubscriptionRepository,
    SubscriptionRepository,
    get_memory_subscription_repository,
)
from storefront.subscriptions.service import SubscriptionService

SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_request_id(request: Request) -> str | None:
    """Get the correlation ID assigned by the request ID middleware."""
    return getattr(request.state, "request_id", None)


async def get_db_session(settings: SettingsDep) -> AsyncGenerator[AsyncSession | None, None]:
    """Open a catalog store session when the SQL backend is configured."""
    if settings.catalog_backend != "sql":
        yield None
        return
    async with session_scope(settings.database_url) as session:
        yield session


SessionDep = Annotated[AsyncSession | None, Depends(get_db_session)]


# ============================================================================
# Repositories
# ============================================================================


def get_catalog_repository(session: SessionDep) -> CatalogRepository:
    """Get the catalog repository for the configured backend."""
    if session is None:
        return get_memory_catalog_repository()
    return SqlCatalogRepository(session)


def get_subscription_repository(session: SessionDep) -> SubscriptionRepository:
    """Get the subscription repository for the configured backend."""
    if session is None:
        return get_memory_subscription_repository()
    return SqlSubscriptionRepository(session)


# ============================================================================
# Object Stores
# ============================================================================


def _object_store(settings: Settings, bucket: str | None, setting_name: str) -> ObjectStore:
    if settings.storage_backend == "memory":
        return get_memory_object_store(
            bucket or setting_name.lower(),
            signing_key=settings.link_signing_key,
        )
    if not bucket:
        raise ConfigurationError(setting_name)
    return S3ObjectStore(
        bucket,
        endpoint_url=settings.s3_endpoint_url,
        region_name=settings.aws_region,
    )


def get_image_store(settings: SettingsDep) -> ObjectStore:
    """Get the object store holding cover images."""
    return _object_store(settings, settings.image_bucket, "IMAGE_BUCKET")


def get_asset_store(settings: SettingsDep) -> ObjectStore:
    """Get the object store holding purchasable downloads."""
    return _object_store(settings, settings.asset_bucket, "ASSET_BUCKET")


# ============================================================================
# Services
# ============================================================================


def get_product_service(
    settings: SettingsDep,
    catalog: Annotated[CatalogRepository, Depends(get_catalog_repository)],
    image_store: Annotated[ObjectStore, Depends(get_image_store)],
    asset_store: Annotated[ObjectStore, Depends(get_asset_store)],
    request_id: Annotated[str | None, Depends(get_request_id)],
) -> ProductService:
    """Get product service for this request."""
    return ProductService(
        catalog=catalog,
        image_store=image_store,
        asset_store=asset_store,
        upload_link_ttl=settings.upload_link_ttl_seconds,
        download_link_ttl=settings.download_link_ttl_seconds,
        image_link_ttl=settings.image_link_ttl_seconds,
        request_id=request_id,
    )


def get_subscription_service(
    repository: Annotated[SubscriptionRepository, Depends(get_subscription_repository)],
    request_id: Annotated[str | None, Depends(get_request_id)],
) -> SubscriptionService:
    """Get subscription service for this request."""
    return SubscriptionService(repository, request_id=request_id)


ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]
SubscriptionServiceDep = Annotated[SubscriptionService, Depends(get_subscription_service)]

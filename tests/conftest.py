"""Shared fixtures and test doubles."""

from datetime import datetime, timedelta, timezone

import pytest

from storefront.catalog.ids import IdGenerator
from storefront.catalog.repository import (
    InMemoryCatalogRepository,
    reset_memory_catalog_repository,
)
from storefront.catalog.service import ProductService
from storefront.domain.entities import Product
from storefront.domain.exceptions import PersistenceFailedError, StorageWriteFailedError
from storefront.storage.memory import InMemoryObjectStore, reset_memory_object_stores
from storefront.subscriptions.repository import reset_memory_subscription_repository

# PNG signature followed by an arbitrary payload
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"cover-image-payload"


class FakeClock:
    """Controllable clock for link expiry."""

    def __init__(self, now: datetime | None = None) -> None:
        self.now = now or datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += timedelta(seconds=seconds)


class RecordingObjectStore(InMemoryObjectStore):
    """In-memory store that records writes and can be told to fail them."""

    def __init__(self, bucket: str, clock: FakeClock, fail_writes: bool = False) -> None:
        super().__init__(bucket, signing_key="test-signing-key", clock=clock)
        self.fail_writes = fail_writes
        self.put_calls: list[str] = []
        self.exists_calls: list[str] = []

    async def put_object(self, key, data, content_type=None):
        self.put_calls.append(key)
        if self.fail_writes:
            raise StorageWriteFailedError(key, "simulated outage")
        await super().put_object(key, data, content_type)

    async def object_exists(self, key):
        self.exists_calls.append(key)
        return await super().object_exists(key)


class RecordingCatalogRepository(InMemoryCatalogRepository):
    """In-memory catalog that records inserts and checks image presence."""

    def __init__(
        self,
        image_store: InMemoryObjectStore | None = None,
        fail_inserts: bool = False,
    ) -> None:
        super().__init__()
        self.image_store = image_store
        self.fail_inserts = fail_inserts
        self.insert_calls: list[Product] = []
        self.image_present_at_insert: list[bool] = []

    async def insert(self, product):
        self.insert_calls.append(product)
        if self.image_store is not None:
            self.image_present_at_insert.append(product.image_key in self.image_store.keys())
        if self.fail_inserts:
            raise PersistenceFailedError("simulated outage")
        return await super().insert(product)


@pytest.fixture(autouse=True)
def reset_memory_backends():
    """Reset process-wide in-memory backends around each test."""
    reset_memory_catalog_repository()
    reset_memory_subscription_repository()
    reset_memory_object_stores()
    yield
    reset_memory_catalog_repository()
    reset_memory_subscription_repository()
    reset_memory_object_stores()


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def image_store(clock: FakeClock) -> RecordingObjectStore:
    return RecordingObjectStore("images", clock)


@pytest.fixture
def asset_store(clock: FakeClock) -> RecordingObjectStore:
    return RecordingObjectStore("assets", clock)


@pytest.fixture
def catalog(image_store: RecordingObjectStore) -> RecordingCatalogRepository:
    return RecordingCatalogRepository(image_store)


@pytest.fixture
def service(
    catalog: RecordingCatalogRepository,
    image_store: RecordingObjectStore,
    asset_store: RecordingObjectStore,
) -> ProductService:
    return ProductService(
        catalog=catalog,
        image_store=image_store,
        asset_store=asset_store,
        ids=IdGenerator(),
        upload_link_ttl=900,
        download_link_ttl=300,
        image_link_ttl=3600,
    )

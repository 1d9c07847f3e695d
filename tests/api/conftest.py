"""Shared fixtures for API tests."""

import base64

import pytest
from fastapi.testclient import TestClient

from storefront.infrastructure.config import Settings, get_settings
from storefront.main import app
from storefront.storage.memory import InMemoryObjectStore, get_memory_object_store

PNG_BASE64 = base64.b64encode(b"\x89PNG\r\n\x1a\n" + b"cover-image-payload").decode("ascii")


@pytest.fixture
def test_settings() -> Settings:
    """Settings wired to the in-memory catalog and object stores."""
    return Settings(
        catalog_backend="memory",
        storage_backend="memory",
        image_bucket="images",
        asset_bucket="assets",
        link_signing_key="api-test-signing-key",
    )


@pytest.fixture
def client(test_settings: Settings) -> TestClient:
    """Create test client using the in-memory backends."""
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def asset_bucket(test_settings: Settings) -> InMemoryObjectStore:
    """The in-memory store the API mints asset links against."""
    return get_memory_object_store("assets", signing_key=test_settings.link_signing_key)


@pytest.fixture
def image_bucket(test_settings: Settings) -> InMemoryObjectStore:
    """The in-memory store holding cover images."""
    return get_memory_object_store("images", signing_key=test_settings.link_signing_key)


@pytest.fixture
def product_payload() -> dict:
    """A valid product creation body."""
    return {
        "name": "Field Notes",
        "description": "Printable notebook templates",
        "price": 19.99,
        "coverImage": PNG_BASE64,
    }

"""Tests for domain entities and exceptions."""

from dataclasses import FrozenInstanceError
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from storefront.domain.entities import Product, SubscriptionEntry
from storefront.domain.exceptions import (
    AssetNotFoundError,
    ConfigurationError,
    DomainError,
    InvalidInputError,
    InvalidLinkError,
    LinkExpiredError,
    NotFoundError,
    PersistenceFailedError,
    ProductNotFoundError,
    StorageError,
    StorageWriteFailedError,
)


def make_product(**overrides) -> Product:
    fields = {
        "id": "0a1b2c3d4e5f",
        "name": "Mug",
        "description": "Ceramic mug",
        "price": Decimal("12.50"),
        "image_key": "img_0a1b2c3d4e5f",
    }
    fields.update(overrides)
    return Product(**fields)


class TestProduct:
    """Tests for the Product entity."""

    def test_defaults(self) -> None:
        product = make_product()

        assert product.asset_keys == ()
        assert product.primary_asset_key is None
        assert product.created_at.tzinfo == timezone.utc

    def test_primary_asset_key(self) -> None:
        product = make_product(asset_keys=("asset_a", "asset_b"))
        assert product.primary_asset_key == "asset_a"

    def test_immutable(self) -> None:
        product = make_product()
        with pytest.raises(FrozenInstanceError):
            product.name = "Cup"

    def test_missing_fields(self) -> None:
        assert make_product().missing_fields() == []
        assert make_product(name="", image_key="").missing_fields() == ["name", "image_key"]


class TestSubscriptionEntry:
    def test_created_at(self) -> None:
        created = datetime(2026, 3, 1, tzinfo=timezone.utc)
        entry = SubscriptionEntry(email="a@example.com", created_at=created)
        assert entry.created_at == created


class TestExceptions:
    """Tests for the domain error hierarchy."""

    def test_invalid_input(self) -> None:
        error = InvalidInputError("price", "must be positive")

        assert isinstance(error, DomainError)
        assert error.field == "price"
        assert error.message == "Invalid price: must be positive"
        assert error.details == {"field": "price", "reason": "must be positive"}
        assert error.error_code == "INVALID_INPUT"

    def test_not_found(self) -> None:
        assert isinstance(ProductNotFoundError("p1"), NotFoundError)
        assert "p1" in ProductNotFoundError("p1").message

    def test_asset_not_found_messages(self) -> None:
        assert AssetNotFoundError("p1").message == "Product p1 has no downloadable asset"
        error = AssetNotFoundError("p1", "asset_x")
        assert error.message == "Asset asset_x for product p1 does not exist"
        assert error.details == {"product_id": "p1", "key": "asset_x"}

    def test_storage_errors(self) -> None:
        error = LinkExpiredError("asset_x")

        assert isinstance(error, InvalidLinkError)
        assert isinstance(error, StorageError)
        assert error.error_code == "LINK_EXPIRED"
        assert error.details == {"key": "asset_x"}
        assert StorageWriteFailedError("k", "boom").details == {"key": "k", "reason": "boom"}

    def test_persistence_failed_details(self) -> None:
        assert PersistenceFailedError("boom").details == {}
        assert PersistenceFailedError("boom", {"fields": ["name"]}).details == {"fields": ["name"]}

    def test_configuration_error(self) -> None:
        error = ConfigurationError("IMAGE_BUCKET")
        assert error.message == "IMAGE_BUCKET is not set"

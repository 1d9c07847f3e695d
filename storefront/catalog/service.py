"""Product lifecycle service.

Orchestrates the identity generator, the object stores and the catalog
repository. Every operation runs the same fixed sequence: validate,
write to object storage, write the catalog record, respond. Catalog
metadata therefore never references bytes that are not yet stored.

If the object write succeeds and the catalog write then fails, the
object is left in place as an orphan. It is not referenced by any
record and can be collected out of band, so no compensating delete
is attempted.
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

import structlog

from storefront.catalog.ids import ASSET_KEY_PREFIX, IMAGE_KEY_PREFIX, IdGenerator
from storefront.catalog.repository import CatalogRepository
from storefront.domain.entities import DownloadLink, Product, UploadLink
from storefront.domain.exceptions import (
    AssetNotFoundError,
    InvalidInputError,
    PersistenceError,
    ProductNotFoundError,
)
from storefront.storage.gateway import ObjectStore

logger = structlog.get_logger()

CENT = Decimal("0.01")


# ============================================================================
# Input Validation
# ============================================================================


def _require_text(field: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(field, "must be a non-empty string")
    return value.strip()


def _require_price(value: Any) -> Decimal:
    if value is None:
        raise InvalidInputError("price", "is required")
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal, str)):
        raise InvalidInputError("price", "must be a number")
    try:
        price = Decimal(str(value))
    except InvalidOperation as e:
        raise InvalidInputError("price", "must be a number") from e
    if not price.is_finite():
        raise InvalidInputError("price", "must be a finite number")

    price = price.quantize(CENT, rounding=ROUND_HALF_UP)
    if price <= 0:
        raise InvalidInputError("price", "must be positive")
    return price


def _require_bytes(field: str, value: Any) -> bytes:
    if not isinstance(value, (bytes, bytearray)) or not value:
        raise InvalidInputError(field, "must be a non-empty binary payload")
    return bytes(value)


def _require_asset_keys(value: Iterable[str] | None) -> tuple[str, ...]:
    if not value:
        return ()
    keys: list[str] = []
    for key in value:
        if not isinstance(key, str) or not key.startswith(ASSET_KEY_PREFIX):
            raise InvalidInputError("assetKeys", f"{key!r} is not an asset key")
        if key not in keys:
            keys.append(key)
    return tuple(keys)


# ============================================================================
# Product Service
# ============================================================================


class ProductService:
    """Application service for the product and asset lifecycle.

    The service holds no state of its own. It is built for one request
    from the collaborators it is given and discarded afterwards.

    Example usage:
        service = ProductService(
            catalog=SqlCatalogRepository(session),
            image_store=S3ObjectStore("product-images"),
            asset_store=S3ObjectStore("product-assets"),
        )
        product = await service.create_product("Mug", "Ceramic mug", 12.5, png_bytes)
    """

    def __init__(
        self,
        catalog: CatalogRepository,
        image_store: ObjectStore,
        asset_store: ObjectStore,
        ids: IdGenerator | None = None,
        upload_link_ttl: int = 900,
        download_link_ttl: int = 300,
        image_link_ttl: int = 3600,
        request_id: str | None = None,
    ) -> None:
        """Initialize service.

        Args:
            catalog: Product record repository.
            image_store: Object store for cover images.
            asset_store: Object store for purchasable downloads.
            ids: Identifier generator.
            upload_link_ttl: Upload link lifetime in seconds.
            download_link_ttl: Asset download link lifetime in seconds.
            image_link_ttl: Cover image link lifetime in seconds.
            request_id: Request ID for correlation.
        """
        self.catalog = catalog
        self.image_store = image_store
        self.asset_store = asset_store
        self.ids = ids or IdGenerator()
        self.upload_link_ttl = upload_link_ttl
        self.download_link_ttl = download_link_ttl
        self.image_link_ttl = image_link_ttl
        self.request_id = request_id

    async def create_product(
        self,
        name: Any,
        description: Any,
        price: Any,
        cover_image: Any,
        content_type: str | None = None,
        asset_keys: Iterable[str] | None = None,
    ) -> Product:
        """Create a product with its cover image.

        Args:
            name: Product name.
            description: Product description.
            price: Positive price.
            cover_image: Cover image bytes.
            content_type: Optional MIME type of the cover image.
            asset_keys: Keys of already uploaded downloadable assets.

        Returns:
            The persisted product.

        Raises:
            InvalidInputError: If a field is missing or malformed, or an
                asset key has no uploaded bytes. Nothing is written.
            StorageWriteFailedError: If the cover image write failed. No
                catalog record is written.
            PersistenceError: If the catalog write failed. The cover image
                stays behind as an orphaned object.
        """
        name = _require_text("name", name)
        description = _require_text("description", description)
        price = _require_price(price)
        cover_image = _require_bytes("coverImage", cover_image)
        keys = _require_asset_keys(asset_keys)

        for key in keys:
            if not await self.asset_store.object_exists(key):
                raise InvalidInputError("assetKeys", f"{key} has not been uploaded")

        image_key = self.ids.new_id(IMAGE_KEY_PREFIX)
        await self.image_store.put_object(image_key, cover_image, content_type)

        product = Product(
            id=self.ids.new_id(),
            name=name,
            description=description,
            price=price,
            image_key=image_key,
            asset_keys=keys,
        )
        try:
            await self.catalog.insert(product)
        except PersistenceError:
            logger.warning(
                "Catalog write failed after image upload; image is orphaned",
                image_key=image_key,
                product_id=product.id,
                request_id=self.request_id,
            )
            raise

        logger.info(
            "Product created",
            product_id=product.id,
            image_key=image_key,
            asset_count=len(keys),
            request_id=self.request_id,
        )
        return product

    async def list_products(self) -> list[Product]:
        """List every product in the catalog."""
        return await self.catalog.list_all()

    async def get_product(self, product_id: str) -> Product:
        """Get a product by ID.

        Raises:
            ProductNotFoundError: If no product has that ID.
        """
        product = await self.catalog.get_by_id(product_id) if product_id else None
        if product is None:
            logger.info("Product not found", product_id=product_id, request_id=self.request_id)
            raise ProductNotFoundError(product_id)
        return product

    async def create_asset_upload_link(self) -> UploadLink:
        """Mint a fresh asset key and a time-boxed link to upload it.

        Nothing is recorded in the catalog; the key is bound to a product
        when the product is created with it.
        """
        key = self.ids.new_id(ASSET_KEY_PREFIX)
        link = await self.asset_store.create_upload_link(key, self.upload_link_ttl)
        logger.info("Asset upload link issued", key=key, request_id=self.request_id)
        return link

    async def get_asset_download_link(self, product_id: str) -> DownloadLink:
        """Get a time-boxed link to a product's primary downloadable asset.

        Raises:
            ProductNotFoundError: If the product does not exist.
            AssetNotFoundError: If it has no asset or the bytes are missing.
        """
        product = await self.get_product(product_id)
        key = product.primary_asset_key
        if key is None:
            logger.info("Product has no asset", product_id=product_id, request_id=self.request_id)
            raise AssetNotFoundError(product_id)
        return await self._download_link(product_id, key)

    async def get_product_downloads(self, product_id: str) -> list[DownloadLink]:
        """Get time-boxed links to every downloadable asset of a product.

        Raises:
            ProductNotFoundError: If the product does not exist.
            AssetNotFoundError: If it has no assets or any bytes are missing.
        """
        product = await self.get_product(product_id)
        if not product.asset_keys:
            logger.info("Product has no asset", product_id=product_id, request_id=self.request_id)
            raise AssetNotFoundError(product_id)
        return [await self._download_link(product_id, key) for key in product.asset_keys]

    async def get_cover_image_link(self, product: Product) -> DownloadLink:
        """Get a time-boxed link to a product's cover image."""
        return await self.image_store.create_download_link(product.image_key, self.image_link_ttl)

    async def _download_link(self, product_id: str, key: str) -> DownloadLink:
        if not await self.asset_store.object_exists(key):
            logger.warning(
                "Bound asset missing from storage",
                product_id=product_id,
                key=key,
                request_id=self.request_id,
            )
            raise AssetNotFoundError(product_id, key)
        return await self.asset_store.create_download_link(key, self.download_link_ttl)

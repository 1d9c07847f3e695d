"""API schemas for the storefront API.

Pydantic models for request/response validation and serialization.
Field names are camelCase on the wire.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from storefront.domain.entities import DownloadLink, Product, UploadLink


class CamelModel(BaseModel):
    """Base model serializing fields as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


# ============================================================================
# Product Schemas
# ============================================================================


class ProductCreateRequest(CamelModel):
    """Request to create a product.

    Every field is optional at the schema level; presence and content
    are checked by the lifecycle service so all violations are reported
    the same way.
    """

    name: str | None = Field(default=None, description="Product name")
    description: str | None = Field(default=None, description="Product description")
    cover_image: str | None = Field(
        default=None,
        description="Cover image as base64, optionally as a data: URL",
    )
    price: Decimal | None = Field(default=None, description="Positive price")
    asset_keys: list[str] | None = Field(
        default=None,
        description="Keys of downloadable assets uploaded via /products/upload",
    )


class ImageSchema(BaseModel):
    """Image reference rendered by the storefront."""

    src: str = Field(..., description="Time-limited image URL")


class ProductSummary(CamelModel):
    """Product as listed in the catalog."""

    id: str = Field(..., description="Product identifier")
    name: str = Field(..., description="Product name")
    description: str = Field(..., description="Product description")
    price: float = Field(..., description="Price")
    image_key: str = Field(..., description="Cover image object key")
    image_url: str = Field(..., description="Time-limited cover image URL")

    @classmethod
    def from_product(cls, product: Product, image_link: DownloadLink) -> "ProductSummary":
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=float(product.price),
            image_key=product.image_key,
            image_url=image_link.url,
        )


class ProductDetail(ProductSummary):
    """Full product detail."""

    images: list[ImageSchema] = Field(default_factory=list, description="Product images")
    has_downloads: bool = Field(..., description="Whether the product has downloadable assets")
    created_at: datetime = Field(..., description="When the product was created")

    @classmethod
    def from_product(cls, product: Product, image_link: DownloadLink) -> "ProductDetail":
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=float(product.price),
            image_key=product.image_key,
            image_url=image_link.url,
            images=[ImageSchema(src=image_link.url)],
            has_downloads=bool(product.asset_keys),
            created_at=product.created_at,
        )


# ============================================================================
# Link Schemas
# ============================================================================


class UploadLinkResponse(CamelModel):
    """Pre-authorized upload link for a new asset key."""

    url: str = Field(..., description="Upload URL (HTTP PUT)")
    key: str = Field(..., description="Asset key to bind to a product")
    expires_at: datetime = Field(..., description="When the link stops working")

    @classmethod
    def from_link(cls, link: UploadLink) -> "UploadLinkResponse":
        return cls(url=link.url, key=link.key, expires_at=link.expires_at)


class DownloadLinkResponse(CamelModel):
    """Pre-authorized download link."""

    url: str = Field(..., description="Download URL")
    expires_at: datetime = Field(..., description="When the link stops working")

    @classmethod
    def from_link(cls, link: DownloadLink) -> "DownloadLinkResponse":
        return cls(url=link.url, expires_at=link.expires_at)


# ============================================================================
# Subscription Schemas
# ============================================================================


class SubscribeRequest(BaseModel):
    """Request to subscribe an email address."""

    email: str | None = Field(default=None, description="Email address")

"""Product API endpoints.

Provides endpoints for the product and asset lifecycle:
- POST /products - create a product with its cover image
- GET /products - list products
- GET /products/upload - get a pre-authorized asset upload link
- GET /products/{id} - get product detail
- GET /products/{id}/assets - get a download link for the primary asset
- GET /products/{id}/downloads - get download links for every asset
"""

import base64
import binascii
import re

from fastapi import APIRouter, Response, status

from storefront.api.dependencies import ProductServiceDep
from storefront.api.schemas import (
    DownloadLinkResponse,
    ErrorResponse,
    ProductCreateRequest,
    ProductDetail,
    ProductSummary,
    UploadLinkResponse,
)
from storefront.domain.exceptions import InvalidInputError

router = APIRouter(prefix="/products", tags=["Products"])

DATA_URL_PATTERN = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(;[^,]*)?;base64,(?P<data>.*)$", re.DOTALL)


# ============================================================================
# Converters
# ============================================================================


def decode_cover_image(value: str | None) -> tuple[bytes, str | None]:
    """Decode a base64 cover image, accepting data: URLs.

    Args:
        value: Base64 payload or data URL.

    Returns:
        Image bytes and the MIME type from the data URL, if any.

    Raises:
        InvalidInputError: If the payload is missing or not valid base64.
    """
    if not value:
        raise InvalidInputError("coverImage", "is required")

    content_type = None
    match = DATA_URL_PATTERN.match(value)
    if match:
        content_type = match.group("mime")
        value = match.group("data")

    try:
        data = base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidInputError("coverImage", "is not valid base64") from e
    return data, content_type


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Create product",
    description="Store the cover image, then record the product.",
)
async def create_product(
    request: ProductCreateRequest,
    service: ProductServiceDep,
) -> Response:
    """Create a product.

    The cover image is written to object storage before the catalog
    record, so a listed product always has its image.
    """
    cover_image, content_type = decode_cover_image(request.cover_image)
    await service.create_product(
        name=request.name,
        description=request.description,
        price=request.price,
        cover_image=cover_image,
        content_type=content_type,
        asset_keys=request.asset_keys,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "",
    response_model=list[ProductSummary],
    responses={500: {"model": ErrorResponse}},
    summary="List products",
)
async def list_products(service: ProductServiceDep) -> list[ProductSummary]:
    """List all products with time-limited cover image links."""
    products = await service.list_products()
    return [
        ProductSummary.from_product(product, await service.get_cover_image_link(product))
        for product in products
    ]


@router.get(
    "/upload",
    response_model=UploadLinkResponse,
    responses={500: {"model": ErrorResponse}},
    summary="Get asset upload link",
    description="Mint an asset key and a time-boxed link to upload its bytes directly to storage.",
)
async def get_asset_upload_link(service: ProductServiceDep) -> UploadLinkResponse:
    link = await service.create_asset_upload_link()
    return UploadLinkResponse.from_link(link)


@router.get(
    "/{product_id}",
    response_model=ProductDetail,
    responses={
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Get product",
)
async def retrieve_product(product_id: str, service: ProductServiceDep) -> ProductDetail:
    product = await service.get_product(product_id)
    image_link = await service.get_cover_image_link(product)
    return ProductDetail.from_product(product, image_link)


@router.get(
    "/{product_id}/assets",
    response_model=DownloadLinkResponse,
    responses={
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Get asset download link",
)
async def get_asset_download_link(
    product_id: str,
    service: ProductServiceDep,
) -> DownloadLinkResponse:
    link = await service.get_asset_download_link(product_id)
    return DownloadLinkResponse.from_link(link)


@router.get(
    "/{product_id}/downloads",
    response_model=list[DownloadLinkResponse],
    responses={
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Get product downloads",
)
async def get_product_downloads(
    product_id: str,
    service: ProductServiceDep,
) -> list[DownloadLinkResponse]:
    links = await service.get_product_downloads(product_id)
    return [DownloadLinkResponse.from_link(link) for link in links]

"""Product Catalog Service.

Provides identifier generation, product persistence and the product
lifecycle operations built on top of the object stores.
"""

from storefront.catalog.ids import IdGenerator
from storefront.catalog.models import ProductModel, SubscriptionModel
from storefront.catalog.repository import (
    CatalogRepository,
    InMemoryCatalogRepository,
    SqlCatalogRepository,
)
from storefront.catalog.service import ProductService

__all__ = [
    # Identifiers
    "IdGenerator",
    # Models
    "ProductModel",
    "SubscriptionModel",
    # Repository
    "CatalogRepository",
    "InMemoryCatalogRepository",
    "SqlCatalogRepository",
    # Service
    "ProductService",
]

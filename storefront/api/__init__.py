"""API layer module.

Contains FastAPI routers, request/response schemas and request-scoped
dependency wiring.
"""

from storefront.api.health import router as health_router
from storefront.api.products import router as products_router
from storefront.api.subscriptions import router as subscriptions_router

__all__ = [
    "health_router",
    "products_router",
    "subscriptions_router",
]

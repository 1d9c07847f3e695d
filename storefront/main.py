"""Storefront API main application module.

This module initializes the FastAPI application and configures
core middleware, routers, and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.api.errors import setup_exception_handlers
from storefront.api.health import router as health_router
from storefront.api.middleware import setup_middleware
from storefront.api.products import router as products_router
from storefront.api.subscriptions import router as subscriptions_router
from storefront.infrastructure.config import settings
from storefront.infrastructure.database import create_tables
from storefront.infrastructure.logging import configure_logging

configure_logging(settings.log_level)
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    logger.info(
        "Starting storefront API",
        version=settings.api_version,
        catalog_backend=settings.catalog_backend,
        storage_backend=settings.storage_backend,
    )

    if settings.catalog_backend == "sql" and settings.database_auto_create:
        await create_tables(settings.database_url)
        logger.info("Catalog tables created")

    yield

    logger.info("Shutting down storefront API")


app = FastAPI(
    title="Storefront API",
    description="Product catalog and digital asset storefront backend",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Request context middleware (request ID, access log, fallback 500)
setup_middleware(app)

# CORS middleware (added last so it wraps every response, 500s included)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Domain error and validation error handlers
setup_exception_handlers(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(products_router)
app.include_router(subscriptions_router)

"""Catalog repository for product records.

Defines the repository interface and its SQL and in-memory
implementations. Records are inserted whole and never updated.
"""

from abc import ABC, abstractmethod

import structlog
from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.catalog.models import ProductModel
from storefront.domain.entities import Product
from storefront.domain.exceptions import (
    PersistenceFailedError,
    PersistenceUnavailableError,
)

logger = structlog.get_logger()


def _check_complete(product: Product) -> None:
    """Refuse records with empty required fields."""
    missing = product.missing_fields()
    if missing:
        raise PersistenceFailedError(
            f"missing required fields: {', '.join(missing)}",
            details={"product_id": product.id, "missing": missing},
        )


class CatalogRepository(ABC):
    """Persistence of product records.

    Example usage:
        async with get_session_factory()() as session:
            repo = SqlCatalogRepository(session)
            await repo.insert(product)
            products = await repo.list_all()
    """

    @abstractmethod
    async def insert(self, product: Product) -> Product:
        """Insert a fully populated product.

        Raises:
            PersistenceFailedError: If a required field is missing or the
                write did not complete. Nothing is written in that case.
        """

    @abstractmethod
    async def get_by_id(self, product_id: str) -> Product | None:
        """Get product by ID.

        Raises:
            PersistenceUnavailableError: If the store cannot be read.
        """

    @abstractmethod
    async def list_all(self) -> list[Product]:
        """List all products in insertion order.

        Raises:
            PersistenceUnavailableError: If the store cannot be read.
        """

    @abstractmethod
    async def ping(self) -> None:
        """Check the store is reachable.

        Raises:
            PersistenceUnavailableError: If it is not.
        """


# ============================================================================
# SQL Repository
# ============================================================================


class SqlCatalogRepository(CatalogRepository):
    """Catalog repository backed by an async SQLAlchemy session.

    Each insert commits on its own so a record is durable before the
    caller reports success.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def insert(self, product: Product) -> Product:
        _check_complete(product)
        try:
            self.session.add(ProductModel.from_domain(product))
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Product insert failed", product_id=product.id, error=str(e))
            raise PersistenceFailedError(str(e), details={"product_id": product.id}) from e
        return product

    async def get_by_id(self, product_id: str) -> Product | None:
        query = select(ProductModel).where(ProductModel.id == product_id)
        try:
            result = await self.session.execute(query)
        except SQLAlchemyError as e:
            logger.error("Product lookup failed", product_id=product_id, error=str(e))
            raise PersistenceUnavailableError(str(e)) from e
        model = result.scalar_one_or_none()
        return model.to_domain() if model else None

    async def list_all(self) -> list[Product]:
        query = select(ProductModel).order_by(ProductModel.seq.asc())
        try:
            result = await self.session.execute(query)
        except SQLAlchemyError as e:
            logger.error("Product listing failed", error=str(e))
            raise PersistenceUnavailableError(str(e)) from e
        return [model.to_domain() for model in result.scalars().all()]

    async def ping(self) -> None:
        try:
            await self.session.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise PersistenceUnavailableError(str(e)) from e


# ============================================================================
# In-Memory Repository
# ============================================================================


class InMemoryCatalogRepository(CatalogRepository):
    """In-memory repository for products."""

    def __init__(self) -> None:
        self._products: dict[str, Product] = {}

    async def insert(self, product: Product) -> Product:
        _check_complete(product)
        if product.id in self._products:
            raise PersistenceFailedError(
                f"duplicate product id {product.id}",
                details={"product_id": product.id},
            )
        self._products[product.id] = product
        return product

    async def get_by_id(self, product_id: str) -> Product | None:
        return self._products.get(product_id)

    async def list_all(self) -> list[Product]:
        return list(self._products.values())

    async def ping(self) -> None:
        return None


# Global in-memory instance
_memory_repo: InMemoryCatalogRepository | None = None


def get_memory_catalog_repository() -> InMemoryCatalogRepository:
    """Get in-memory catalog repository singleton."""
    global _memory_repo
    if _memory_repo is None:
        _memory_repo = InMemoryCatalogRepository()
    return _memory_repo


def reset_memory_catalog_repository() -> None:
    """Reset in-memory catalog repository (for testing)."""
    global _memory_repo
    _memory_repo = None

"""Subscription repositories."""

from abc import ABC, abstractmethod

import structlog
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.catalog.models import SubscriptionModel
from storefront.domain.entities import SubscriptionEntry
from storefront.domain.exceptions import PersistenceFailedError, PersistenceUnavailableError

logger = structlog.get_logger()


class SubscriptionRepository(ABC):
    """Append-only log of subscription entries."""

    @abstractmethod
    async def add(self, entry: SubscriptionEntry) -> SubscriptionEntry:
        """Append an entry.

        Raises:
            PersistenceFailedError: If the write did not complete.
        """

    @abstractmethod
    async def list_all(self) -> list[SubscriptionEntry]:
        """List entries in insertion order."""


class SqlSubscriptionRepository(SubscriptionRepository):
    """Subscription repository backed by an async SQLAlchemy session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def add(self, entry: SubscriptionEntry) -> SubscriptionEntry:
        try:
            self.session.add(SubscriptionModel.from_domain(entry))
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Subscription insert failed", error=str(e))
            raise PersistenceFailedError(str(e)) from e
        return entry

    async def list_all(self) -> list[SubscriptionEntry]:
        query = select(SubscriptionModel).order_by(SubscriptionModel.id.asc())
        try:
            result = await self.session.execute(query)
        except SQLAlchemyError as e:
            raise PersistenceUnavailableError(str(e)) from e
        return [model.to_domain() for model in result.scalars().all()]


class InMemorySubscriptionRepository(SubscriptionRepository):
    """In-memory repository for subscriptions."""

    def __init__(self) -> None:
        self._entries: list[SubscriptionEntry] = []

    async def add(self, entry: SubscriptionEntry) -> SubscriptionEntry:
        self._entries.append(entry)
        return entry

    async def list_all(self) -> list[SubscriptionEntry]:
        return list(self._entries)


# Global in-memory instance
_memory_repo: InMemorySubscriptionRepository | None = None


def get_memory_subscription_repository() -> InMemorySubscriptionRepository:
    """Get in-memory subscription repository singleton."""
    global _memory_repo
    if _memory_repo is None:
        _memory_repo = InMemorySubscriptionRepository()
    return _memory_repo


def reset_memory_subscription_repository() -> None:
    """Reset in-memory subscription repository (for testing)."""
    global _memory_repo
    _memory_repo = None

"""Database configuration and session management.

Provides the async SQLAlchemy engine and session factory for the catalog
store. The engine is created on first use so importing the application
does not require a database driver for the configured URL.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from functools import lru_cache

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from storefront.infrastructure.config import settings

# Base class for models
Base = declarative_base()


@lru_cache
def get_engine(database_url: str | None = None) -> AsyncEngine:
    """Get (or create) the async engine for a database URL.

    Args:
        database_url: Connection URL. Defaults to the configured URL.

    Returns:
        Shared AsyncEngine for that URL.
    """
    return create_async_engine(
        database_url or settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
    )


def get_session_factory(database_url: str | None = None) -> async_sessionmaker[AsyncSession]:
    """Get a session factory bound to the engine for a database URL."""
    return async_sessionmaker(
        get_engine(database_url),
        class_=AsyncSession,
        expire_on_commit=False,
    )


@asynccontextmanager
async def session_scope(database_url: str | None = None) -> AsyncIterator[AsyncSession]:
    """Open a database session for one unit of work.

    The session is closed when the caller is done with it, whether the
    request succeeded or not. Uncommitted work is rolled back on error.

    Yields:
        AsyncSession for database operations.
    """
    async with get_session_factory(database_url)() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def create_tables(database_url: str | None = None) -> None:
    """Create all catalog tables (local development and tests)."""
    # Register models on the metadata
    import storefront.catalog.models  # noqa: F401

    engine = get_engine(database_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

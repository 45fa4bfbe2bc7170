"""Async engine and session factory for PostgreSQL.

Two kinds of session come from the same factory: the request session that
commits when a request succeeds, and the short-lived session in which the
token store commits a consume on its own.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from elevate.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Build the asyncpg engine from DATABASE__* settings."""
    database = settings.database
    return create_async_engine(
        database.url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory; objects stay readable after commit.

    Args:
        engine: Database engine
    """
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)

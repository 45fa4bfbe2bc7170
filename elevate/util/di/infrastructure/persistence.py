"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from elevate.config import Settings
from elevate.domain.repository import AdminTokenRepository, PrincipalRepository
from elevate.domain.service import PrivilegeGuard
from elevate.persistence.database import create_engine, create_session_factory
from elevate.persistence.repository import (
    PostgresAdminTokenRepository,
    PostgresPrincipalRepository,
)
from elevate.util.di.base import ProviderBase
from elevate.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        Committed at the end of the request if no exception occurred,
        rolled back otherwise.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.info("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_principal_repository(
        self, session: AsyncSession, guard: PrivilegeGuard
    ) -> PrincipalRepository:
        """Provide Principal repository."""
        return PostgresPrincipalRepository(session, before_write=guard)

    @provide(scope=Scope.REQUEST)
    def get_admin_token_repository(
        self,
        session: AsyncSession,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> AdminTokenRepository:
        """Provide AdminToken repository."""
        return PostgresAdminTokenRepository(session, session_factory)

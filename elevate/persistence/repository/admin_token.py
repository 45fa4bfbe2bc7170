"""PostgreSQL implementation of AdminToken repository."""

from datetime import datetime
from typing import Optional

import logfire
from sqlalchemy import and_, delete, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from elevate.domain.error import AlreadyConsumedError, DuplicateValueError, NotFoundError
from elevate.domain.model import AdminToken, AdminTokenListing
from elevate.domain.repository import AdminTokenRepository
from elevate.domain.value import PrincipalId, TokenValue
from elevate.persistence.mappers import admin_token_to_dict, row_to_admin_token
from elevate.persistence.tables import admin_tokens_table


class PostgresAdminTokenRepository(AdminTokenRepository):
    """PostgreSQL implementation of AdminTokenRepository."""

    def __init__(
        self,
        session: AsyncSession,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        """Initialize repository.

        Args:
            session: Request-scoped session for reads and housekeeping
            session_factory: Factory for the short transaction in mark_consumed
        """
        self.session = session
        self.session_factory = session_factory

    async def insert(self, token: AdminToken) -> AdminToken:
        """Store a new token.

        Raises:
            DuplicateValueError: If the value already exists
        """
        stmt = insert(admin_tokens_table).values(**admin_token_to_dict(token))
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError:
            raise DuplicateValueError(token.value.redacted())
        return token

    async def find_by_value(self, value: TokenValue) -> Optional[AdminToken]:
        """Find a token by its value."""
        stmt = select(admin_tokens_table).where(
            admin_tokens_table.c.value == value.root
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_admin_token(dict(row)) if row else None

    async def mark_consumed(
        self, value: TokenValue, consumed_by: PrincipalId, now: datetime
    ) -> AdminToken:
        """Atomically mark a token as consumed.

        A single conditional UPDATE guarded by consumed_at IS NULL. It runs
        and commits in its own transaction, so the consumption stands even
        if the caller's request transaction later rolls back.

        Raises:
            AlreadyConsumedError: If another caller consumed it first
            NotFoundError: If the token does not exist
        """
        stmt = (
            update(admin_tokens_table)
            .where(
                and_(
                    admin_tokens_table.c.value == value.root,
                    admin_tokens_table.c.consumed_at.is_(None),
                )
            )
            .values(consumed_at=now, consumed_by=consumed_by)
            .returning(*admin_tokens_table.c)
        )

        async with self.session_factory() as session:
            async with session.begin():
                result = await session.execute(stmt)
                row = result.mappings().first()
                if row is None:
                    exists = await session.execute(
                        select(admin_tokens_table.c.value).where(
                            admin_tokens_table.c.value == value.root
                        )
                    )
                    if exists.first() is None:
                        raise NotFoundError("AdminToken", value.redacted())
                    raise AlreadyConsumedError(value.redacted())

        logfire.info("Token consume committed", token=value.redacted())
        return row_to_admin_token(dict(row))

    async def list_all(self, now: datetime) -> list[AdminTokenListing]:
        """List every token, newest first."""
        stmt = select(admin_tokens_table).order_by(
            admin_tokens_table.c.issued_at.desc()
        )
        result = await self.session.execute(stmt)
        tokens = [row_to_admin_token(dict(row)) for row in result.mappings().all()]
        return [
            AdminTokenListing(token=token, status=token.status_at(now))
            for token in tokens
        ]

    async def delete(self, value: TokenValue) -> None:
        """Delete a token; missing tokens are ignored."""
        stmt = delete(admin_tokens_table).where(
            admin_tokens_table.c.value == value.root
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def delete_expired_unconsumed(self, now: datetime) -> int:
        """Delete tokens past expires_at that were never consumed."""
        stmt = delete(admin_tokens_table).where(
            and_(
                admin_tokens_table.c.consumed_at.is_(None),
                admin_tokens_table.c.expires_at < now,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0

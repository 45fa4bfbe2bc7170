"""PostgreSQL implementation of Principal repository.

Two layers enforce the admin flag invariant here:

1. The before-write hook runs in Python against a snapshot taken with
   SELECT ... FOR UPDATE, before the UPDATE is issued.
2. A BEFORE INSERT OR UPDATE trigger on the principals table compares
   OLD.is_admin with NEW.is_admin and raises SQLSTATE 42501 unless the
   transaction-local elevate.trusted_operator setting is on. It catches
   writes that bypass this repository.
"""

from typing import Any, Optional

import logfire
from sqlalchemy import func, insert, select, text, update
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from elevate.domain.error import (
    PrincipalExistsError,
    PrincipalNotFoundError,
    SelfElevationForbiddenError,
)
from elevate.domain.model import CallerContext, Principal
from elevate.domain.repository import BeforeWriteHook, PrincipalRepository
from elevate.domain.value import PrincipalId
from elevate.persistence.mappers import principal_to_dict, row_to_principal
from elevate.persistence.tables import (
    GUARD_SQLSTATE,
    TRUSTED_OPERATOR_SETTING,
    principals_table,
)

_SET_OPERATOR = text("SELECT set_config(:name, :value, true)")


def _is_guard_violation(error: DBAPIError) -> bool:
    return getattr(error.orig, "sqlstate", None) == GUARD_SQLSTATE


class PostgresPrincipalRepository(PrincipalRepository):
    """PostgreSQL implementation of PrincipalRepository."""

    def __init__(self, session: AsyncSession, before_write: BeforeWriteHook) -> None:
        """Initialize repository.

        Args:
            session: SQLAlchemy async session
            before_write: Invariant hook run before every write
        """
        super().__init__(before_write)
        self.session = session

    async def find_by_id(self, principal_id: PrincipalId) -> Optional[Principal]:
        """Find a principal by ID."""
        stmt = select(principals_table).where(principals_table.c.id == principal_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_principal(dict(row)) if row else None

    async def _lock(self, principal_id: PrincipalId) -> Optional[Principal]:
        stmt = (
            select(principals_table)
            .where(principals_table.c.id == principal_id)
            .with_for_update()
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_principal(dict(row)) if row else None

    async def _set_operator_flag(self, enabled: bool) -> None:
        await self.session.execute(
            _SET_OPERATOR,
            {"name": TRUSTED_OPERATOR_SETTING, "value": "on" if enabled else ""},
        )

    async def _execute_guarded(self, stmt, context: CallerContext, principal_id: str):
        """Run a write with the operator flag scoped to this statement."""
        if context.is_trusted_operator:
            await self._set_operator_flag(True)
        try:
            async with self.session.begin_nested():
                return await self.session.execute(stmt)
        except DBAPIError as e:
            if _is_guard_violation(e):
                logfire.warn(
                    "Principal write rejected by database guard",
                    principal_id=principal_id,
                )
                raise SelfElevationForbiddenError(principal_id) from e
            raise
        finally:
            if context.is_trusted_operator:
                await self._set_operator_flag(False)

    async def insert(self, principal: Principal, context: CallerContext) -> Principal:
        """Create a principal record.

        Raises:
            PrincipalExistsError: If the id is already registered
            AuthorizationError: If the before-write hook denies the write
        """
        if await self.find_by_id(principal.id) is not None:
            raise PrincipalExistsError(str(principal.id))

        self.before_write(None, principal, context)

        stmt = insert(principals_table).values(**principal_to_dict(principal))
        try:
            await self._execute_guarded(stmt, context, str(principal.id))
        except IntegrityError:
            raise PrincipalExistsError(str(principal.id))
        return principal

    async def update(
        self,
        principal_id: PrincipalId,
        changes: dict[str, Any],
        context: CallerContext,
    ) -> Principal:
        """Apply field changes under a row lock.

        The old image is read with FOR UPDATE before the candidate is built,
        so the hook compares against the committed row and no concurrent
        writer can change it in between.

        Raises:
            PrincipalNotFoundError: If the record does not exist
            ValidationError: If a changed value is invalid for its field
            AuthorizationError: If the before-write hook denies the write
        """
        old = await self._lock(principal_id)
        if old is None:
            raise PrincipalNotFoundError(str(principal_id))

        new = self.candidate_image(old, changes)
        self.before_write(old, new, context)

        dumped = principal_to_dict(new)
        values = {key: dumped[key] for key in changes}
        stmt = (
            update(principals_table)
            .where(principals_table.c.id == principal_id)
            .values(**values, updated_at=func.now())
            .returning(*principals_table.c)
        )
        result = await self._execute_guarded(stmt, context, str(principal_id))
        row = result.mappings().first()
        return row_to_principal(dict(row))

    async def commit(self) -> None:
        """Commit the request transaction so far.

        The session starts a new transaction on its next statement, so the
        request-scoped commit at the end stays valid.
        """
        await self.session.commit()

"""In-memory principal repository for testing."""

from typing import Any, Optional

from elevate.domain.error import PrincipalExistsError, PrincipalNotFoundError
from elevate.domain.model import CallerContext, Principal
from elevate.domain.repository import BeforeWriteHook, PrincipalRepository
from elevate.domain.value import PrincipalId


class InMemoryPrincipalRepository(PrincipalRepository):
    """In-memory implementation of PrincipalRepository for testing.

    Runs the same before-write hook as the PostgreSQL repository, with the
    stored image as the old snapshot.
    """

    def __init__(self, before_write: BeforeWriteHook) -> None:
        super().__init__(before_write)
        self._principals: dict[PrincipalId, Principal] = {}

    async def find_by_id(self, principal_id: PrincipalId) -> Optional[Principal]:
        """Find a principal by ID."""
        return self._principals.get(principal_id)

    async def insert(self, principal: Principal, context: CallerContext) -> Principal:
        """Create a principal record."""
        if principal.id in self._principals:
            raise PrincipalExistsError(str(principal.id))
        self.before_write(None, principal, context)
        self._principals[principal.id] = principal
        return principal

    async def update(
        self,
        principal_id: PrincipalId,
        changes: dict[str, Any],
        context: CallerContext,
    ) -> Principal:
        """Apply field changes to a stored principal."""
        old = self._principals.get(principal_id)
        if old is None:
            raise PrincipalNotFoundError(str(principal_id))

        new = self.candidate_image(old, changes)
        self.before_write(old, new, context)
        self._principals[principal_id] = new
        return new

    async def commit(self) -> None:
        """Writes are visible immediately; nothing to flush."""
        return None

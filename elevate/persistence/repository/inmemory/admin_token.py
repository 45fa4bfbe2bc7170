"""In-memory admin token repository for testing."""

from datetime import datetime
from typing import Optional

from elevate.domain.error import AlreadyConsumedError, DuplicateValueError, NotFoundError
from elevate.domain.model import AdminToken, AdminTokenListing
from elevate.domain.repository import AdminTokenRepository
from elevate.domain.value import PrincipalId, TokenValue


class InMemoryAdminTokenRepository(AdminTokenRepository):
    """In-memory implementation of AdminTokenRepository for testing.

    mark_consumed has no await between its check and its write, so it is
    atomic with respect to other coroutines on the same event loop.
    """

    def __init__(self) -> None:
        self._tokens: dict[str, AdminToken] = {}

    async def insert(self, token: AdminToken) -> AdminToken:
        """Store a new token."""
        if token.value.root in self._tokens:
            raise DuplicateValueError(token.value.redacted())
        self._tokens[token.value.root] = token
        return token

    async def find_by_value(self, value: TokenValue) -> Optional[AdminToken]:
        """Find a token by its value."""
        return self._tokens.get(value.root)

    async def mark_consumed(
        self, value: TokenValue, consumed_by: PrincipalId, now: datetime
    ) -> AdminToken:
        """Conditionally mark a token as consumed."""
        token = self._tokens.get(value.root)
        if token is None:
            raise NotFoundError("AdminToken", value.redacted())
        if token.consumed_at is not None:
            raise AlreadyConsumedError(value.redacted())
        consumed = token.model_copy(
            update={"consumed_at": now, "consumed_by": consumed_by}
        )
        self._tokens[value.root] = consumed
        return consumed

    async def list_all(self, now: datetime) -> list[AdminTokenListing]:
        """List every token, newest first."""
        tokens = sorted(self._tokens.values(), key=lambda t: t.issued_at, reverse=True)
        return [AdminTokenListing(token=t, status=t.status_at(now)) for t in tokens]

    async def delete(self, value: TokenValue) -> None:
        """Delete a token; missing tokens are ignored."""
        self._tokens.pop(value.root, None)

    async def delete_expired_unconsumed(self, now: datetime) -> int:
        """Delete expired tokens that were never consumed."""
        doomed = [
            key
            for key, token in self._tokens.items()
            if token.consumed_at is None and token.expires_at < now
        ]
        for key in doomed:
            del self._tokens[key]
        return len(doomed)

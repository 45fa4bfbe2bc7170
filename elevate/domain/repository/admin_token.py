"""Admin token repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from elevate.domain.model import AdminToken, AdminTokenListing
from elevate.domain.value import PrincipalId, TokenValue


class AdminTokenRepository(ABC):
    """Repository for AdminToken records.

    Defines the contract for token persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def insert(self, token: AdminToken) -> AdminToken:
        """Store a new token.

        Args:
            token: The token to store

        Returns:
            The stored token

        Raises:
            DuplicateValueError: If a token with the same value exists
        """
        pass

    @abstractmethod
    async def find_by_value(self, value: TokenValue) -> AdminToken | None:
        """Find a token by its value.

        Args:
            value: The token value

        Returns:
            The token if found, None otherwise
        """
        pass

    @abstractmethod
    async def mark_consumed(
        self, value: TokenValue, consumed_by: PrincipalId, now: datetime
    ) -> AdminToken:
        """Atomically mark a token as consumed.

        Must be a single conditional write that only succeeds while
        consumed_at is null. Two concurrent callers can never both succeed.

        Args:
            value: The token value
            consumed_by: Principal consuming the token
            now: Consumption timestamp

        Returns:
            The consumed token

        Raises:
            AlreadyConsumedError: If the token was already consumed
            NotFoundError: If the token does not exist
        """
        pass

    @abstractmethod
    async def list_all(self, now: datetime) -> list[AdminTokenListing]:
        """List every token, newest first, annotated with derived status.

        Args:
            now: Instant used to derive status

        Returns:
            List of token listings
        """
        pass

    @abstractmethod
    async def delete(self, value: TokenValue) -> None:
        """Delete a token. Deleting a missing token is not an error.

        Args:
            value: The token value
        """
        pass

    @abstractmethod
    async def delete_expired_unconsumed(self, now: datetime) -> int:
        """Delete tokens that expired without being consumed.

        Args:
            now: Cutoff instant

        Returns:
            Number of deleted tokens
        """
        pass

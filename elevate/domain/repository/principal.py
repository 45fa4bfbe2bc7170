"""Principal repository interface."""

from abc import ABC, abstractmethod
from typing import Any, Protocol

from pydantic import ValidationError as PydanticValidationError

from elevate.domain.error import ValidationError
from elevate.domain.model import CallerContext, Principal
from elevate.domain.model.common import utcnow
from elevate.domain.value import PrincipalId


class BeforeWriteHook(Protocol):
    """Invariant check run with both row images before a write commits.

    Receives the pre-mutation snapshot (None on insert), the candidate
    post-mutation image and the writer's context. Raises to deny.
    """

    def __call__(
        self, old: Principal | None, new: Principal, context: CallerContext
    ) -> None: ...


class PrincipalRepository(ABC):
    """Repository for Principal records.

    Every insert and update runs the before-write hook inside the same unit
    of work that applies the change. Implementations must hand the hook an
    old image captured before the change, never a re-read that could observe
    the candidate write.
    """

    def __init__(self, before_write: BeforeWriteHook) -> None:
        self.before_write = before_write

    @staticmethod
    def candidate_image(old: Principal, changes: dict[str, Any]) -> Principal:
        """Build the post-mutation image the hook and the write will use.

        Raises:
            ValidationError: If a changed value is not valid for its field
        """
        try:
            return Principal.model_validate(
                {**old.model_dump(), **changes, "updated_at": utcnow()}
            )
        except PydanticValidationError as e:
            fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
            raise ValidationError(f"Invalid value for: {', '.join(fields)}")

    @abstractmethod
    async def find_by_id(self, principal_id: PrincipalId) -> Principal | None:
        """Find a principal by ID.

        Args:
            principal_id: The principal's unique identifier

        Returns:
            The principal if found, None otherwise
        """
        pass

    @abstractmethod
    async def insert(self, principal: Principal, context: CallerContext) -> Principal:
        """Create a principal record.

        Args:
            principal: The record to create
            context: Who is writing

        Returns:
            The stored principal

        Raises:
            PrincipalExistsError: If the id is already registered
            AuthorizationError: If the before-write hook denies the write
        """
        pass

    @abstractmethod
    async def update(
        self,
        principal_id: PrincipalId,
        changes: dict[str, Any],
        context: CallerContext,
    ) -> Principal:
        """Apply field changes to a principal record.

        Args:
            principal_id: Record to change
            changes: Field name to new value
            context: Who is writing

        Returns:
            The updated principal

        Raises:
            PrincipalNotFoundError: If the record does not exist
            ValidationError: If a changed value is invalid for its field
            AuthorizationError: If the before-write hook denies the write
        """
        pass

    @abstractmethod
    async def commit(self) -> None:
        """Make every write issued so far durable.

        Called by the elevation path so that a failure to persist the grant
        happens while the caller can still report it.
        """
        pass

"""Principal domain service."""

from typing import Any

import logfire

from elevate.domain.error import (
    NotAuthorizedError,
    PrincipalNotFoundError,
    ValidationError,
)
from elevate.domain.model import PROFILE_FIELDS, CallerContext, Principal
from elevate.domain.repository import PrincipalRepository
from elevate.domain.value import Email, PrincipalId

# is_admin is accepted here so that every attempt reaches the guard
UPDATABLE_FIELDS = PROFILE_FIELDS | {"is_admin"}


class PrincipalService:
    """Domain service for principal record operations."""

    def __init__(self, principal_repository: PrincipalRepository) -> None:
        """Initialize principal service.

        Args:
            principal_repository: Principal repository
        """
        self.principal_repository = principal_repository

    def _require_owner_or_operator(
        self, principal_id: PrincipalId, context: CallerContext, action: str
    ) -> None:
        if context.is_anonymous:
            raise NotAuthorizedError(action, anonymous=True)
        if not context.is_trusted_operator and context.principal_id != principal_id:
            raise NotAuthorizedError(action)

    async def get_principal(
        self, principal_id: PrincipalId, context: CallerContext
    ) -> Principal:
        """Get a principal record visible to the caller.

        Raises:
            NotAuthorizedError: If the caller is neither owner nor operator
            PrincipalNotFoundError: If the record does not exist
        """
        with logfire.span("principal_service.get_principal", principal_id=str(principal_id)):
            self._require_owner_or_operator(principal_id, context, "read this principal")
            principal = await self.principal_repository.find_by_id(principal_id)
            if principal is None:
                raise PrincipalNotFoundError(str(principal_id))
            return principal

    async def register_principal(
        self,
        principal_id: PrincipalId,
        email: Email,
        display_name: str | None,
        context: CallerContext,
        is_admin: bool = False,
    ) -> Principal:
        """Create a principal record after identity-provider registration.

        Ordinary principals may only create their own record. The guard
        rejects is_admin=True unless the writer is the operator.

        Raises:
            NotAuthorizedError: Anonymous caller or someone else's id
            PrincipalExistsError: Record already exists
            SelfElevationForbiddenError: Non-operator asked for is_admin=True
        """
        with logfire.span(
            "principal_service.register_principal", principal_id=str(principal_id)
        ):
            self._require_owner_or_operator(
                principal_id, context, "register this principal"
            )
            principal = Principal(
                id=principal_id,
                email=email,
                display_name=display_name,
                is_admin=is_admin,
            )
            saved = await self.principal_repository.insert(principal, context)
            logfire.info("Principal registered", principal_id=str(saved.id))
            return saved

    async def update_principal(
        self,
        principal_id: PrincipalId,
        fields: dict[str, Any],
        context: CallerContext,
    ) -> Principal:
        """Update a principal record.

        Args:
            principal_id: Record to update
            fields: Field name to new value; id and email are not accepted
            context: Caller context

        Returns:
            Updated principal

        Raises:
            NotAuthorizedError: Anonymous caller or someone else's record
            ValidationError: Unknown or immutable field
            PrincipalNotFoundError: Record does not exist
            SelfElevationForbiddenError: Non-operator changing is_admin
        """
        with logfire.span(
            "principal_service.update_principal",
            principal_id=str(principal_id),
            fields=sorted(fields),
        ):
            self._require_owner_or_operator(principal_id, context, "update this principal")

            rejected = set(fields) - UPDATABLE_FIELDS
            if rejected:
                raise ValidationError(
                    f"Fields cannot be updated: {', '.join(sorted(rejected))}"
                )
            if "is_admin" in fields and not isinstance(fields["is_admin"], bool):
                raise ValidationError("is_admin must be true or false")

            updated = await self.principal_repository.update(principal_id, fields, context)
            logfire.info("Principal updated", principal_id=str(principal_id))
            return updated

    async def authorize_token_admin(
        self, context: CallerContext, action: str
    ) -> PrincipalId:
        """Authorize an operator-only token operation.

        The trusted operator context passes, as does an ordinary principal
        whose stored record is an admin. Being an admin does not exempt a
        principal from the privilege guard.

        Returns:
            Principal id to record as the actor

        Raises:
            NotAuthorizedError: Anyone else
        """
        if context.is_trusted_operator:
            if context.principal_id is None:
                raise NotAuthorizedError(action)
            return context.principal_id

        current = context.current_principal()
        if current is None:
            raise NotAuthorizedError(action, anonymous=True)

        principal = await self.principal_repository.find_by_id(current[0])
        if principal is None or not principal.is_admin:
            logfire.warn(
                "Operator-only action denied",
                action=action,
                principal_id=str(current[0]),
            )
            raise NotAuthorizedError(action)
        return principal.id

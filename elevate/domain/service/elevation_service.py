"""Elevation domain service.

Composes token consumption with the single privilege write the guard
exempts. This service is the trusted bridge: it writes is_admin under the
operator context it builds itself, never under the requester's context.
"""

import logfire

from elevate.config import AuthSettings
from elevate.domain.error import (
    GrantAfterConsumeFailedError,
    NotAuthorizedError,
    PrincipalNotFoundError,
)
from elevate.domain.model import CallerContext, Principal
from elevate.domain.repository import PrincipalRepository
from elevate.domain.value import PrincipalId

from .admin_token_service import AdminTokenService
from .base import Service


class ElevationService(Service):
    """Domain service for granting admin privilege."""

    def __init__(
        self,
        admin_token_service: AdminTokenService,
        principal_repository: PrincipalRepository,
        auth_settings: AuthSettings,
    ) -> None:
        """Initialize elevation service.

        Args:
            admin_token_service: Admin token domain service
            principal_repository: Principal repository
            auth_settings: Authentication settings (service principal id)
        """
        self.admin_token_service = admin_token_service
        self.principal_repository = principal_repository
        self.auth_settings = auth_settings

    def _bridge_context(self) -> CallerContext:
        return CallerContext.trusted_operator(self.auth_settings.service_principal_id)

    async def elevate_via_token(
        self, token_value: str, principal_id: PrincipalId, principal_email: str
    ) -> Principal:
        """Consume a token and grant admin to the presenting principal.

        Steps:
        1. Make sure the principal record exists (so a token is never burned
           for a record that cannot receive the grant)
        2. Consume the token (single-use, email-bound, unexpired)
        3. Set is_admin=True through the operator path and commit it, so a
           failure to persist the grant is still reported here

        Args:
            token_value: Token from the registration link
            principal_id: Authenticated principal presenting the token
            principal_email: Verified email of that principal

        Returns:
            Updated principal with is_admin=True

        Raises:
            PrincipalNotFoundError: No record for principal_id
            TokenNotFoundError, TokenExpiredError, TokenAlreadyUsedError,
            EmailMismatchError: Consumption failed; nothing was changed
            GrantAfterConsumeFailedError: Token consumed but the grant failed
        """
        with logfire.span(
            "elevation_service.elevate_via_token", principal_id=str(principal_id)
        ):
            if await self.principal_repository.find_by_id(principal_id) is None:
                raise PrincipalNotFoundError(str(principal_id))

            token = await self.admin_token_service.consume(
                token_value, principal_email, principal_id
            )

            try:
                principal = await self.principal_repository.update(
                    principal_id, {"is_admin": True}, self._bridge_context()
                )
                await self.principal_repository.commit()
            except Exception as e:
                logfire.error(
                    "Admin grant failed after token consumption",
                    token=token.value.redacted(),
                    principal_id=str(principal_id),
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise GrantAfterConsumeFailedError(
                    token.value.redacted(), str(principal_id)
                ) from e

            logfire.info(
                "Admin privilege granted via token",
                token=token.value.redacted(),
                principal_id=str(principal_id),
            )
            return principal

    async def set_admin_flag(
        self, principal_id: PrincipalId, is_admin: bool, context: CallerContext
    ) -> Principal:
        """Directly grant or revoke admin as the trusted operator.

        Also the remediation path after GrantAfterConsumeFailedError.

        Raises:
            NotAuthorizedError: Caller is not the trusted operator context
            PrincipalNotFoundError: Record does not exist
        """
        with logfire.span(
            "elevation_service.set_admin_flag",
            principal_id=str(principal_id),
            is_admin=is_admin,
        ):
            if not context.is_trusted_operator:
                raise NotAuthorizedError(
                    "change admin status", anonymous=context.is_anonymous
                )
            principal = await self.principal_repository.update(
                principal_id, {"is_admin": is_admin}, context
            )
            logfire.info(
                "Admin flag set by operator",
                principal_id=str(principal_id),
                is_admin=is_admin,
            )
            return principal

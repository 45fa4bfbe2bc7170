"""Elevate via token use case."""

import logfire
from pydantic import BaseModel

from elevate.application.usecase.base import BaseUseCase
from elevate.application.usecase.principal.get_principal import PrincipalResponse
from elevate.domain.error import NotAuthorizedError
from elevate.domain.model import CallerContext
from elevate.domain.service import ElevationService


class ElevateViaTokenRequest(BaseModel):
    """Elevation request.

    Only the token comes from the request body. The principal id and email
    come from the caller's verified identity.
    """

    context: CallerContext
    token: str


class ElevateViaTokenUseCase(BaseUseCase):
    """Use case for redeeming an admin registration token."""

    def __init__(self, elevation_service: ElevationService) -> None:
        self.elevation_service = elevation_service

    async def execute(self, request: ElevateViaTokenRequest) -> PrincipalResponse:
        """Redeem the token for the calling principal.

        Raises:
            NotAuthorizedError: Caller is not an ordinary principal
            TokenNotFoundError, TokenExpiredError, TokenAlreadyUsedError,
            EmailMismatchError: Token cannot be consumed by this caller
            GrantAfterConsumeFailedError: Token consumed, grant failed
        """
        current = request.context.current_principal()
        if current is None:
            raise NotAuthorizedError(
                "redeem an admin token", anonymous=request.context.is_anonymous
            )
        principal_id, email = current

        with logfire.span("elevate_via_token.execute", principal_id=str(principal_id)):
            principal = await self.elevation_service.elevate_via_token(
                request.token, principal_id, email.root
            )
            return PrincipalResponse.from_principal(principal)

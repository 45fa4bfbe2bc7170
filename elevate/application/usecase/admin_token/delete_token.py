"""Delete admin token use case."""

from pydantic import BaseModel

from elevate.application.usecase.base import BaseUseCase
from elevate.domain.model import CallerContext
from elevate.domain.service import AdminTokenService, PrincipalService


class DeleteAdminTokenRequest(BaseModel):
    """Delete token request."""

    context: CallerContext
    token: str


class DeleteAdminTokenUseCase(BaseUseCase):
    """Use case for revoking a token. Deleting a missing token succeeds."""

    def __init__(
        self,
        admin_token_service: AdminTokenService,
        principal_service: PrincipalService,
    ) -> None:
        self.admin_token_service = admin_token_service
        self.principal_service = principal_service

    async def execute(self, request: DeleteAdminTokenRequest) -> None:
        await self.principal_service.authorize_token_admin(
            request.context, "delete admin tokens"
        )
        await self.admin_token_service.delete_token(request.token)

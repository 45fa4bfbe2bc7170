"""Cleanup expired admin tokens use case."""

from pydantic import BaseModel

from elevate.application.usecase.base import BaseUseCase
from elevate.domain.model import CallerContext
from elevate.domain.service import AdminTokenService, PrincipalService


class CleanupExpiredTokensRequest(BaseModel):
    """Cleanup request."""

    context: CallerContext


class CleanupExpiredTokensResponse(BaseModel):
    """Cleanup result."""

    deleted: int


class CleanupExpiredTokensUseCase(BaseUseCase):
    """Use case for removing expired tokens that were never used."""

    def __init__(
        self,
        admin_token_service: AdminTokenService,
        principal_service: PrincipalService,
    ) -> None:
        self.admin_token_service = admin_token_service
        self.principal_service = principal_service

    async def execute(
        self, request: CleanupExpiredTokensRequest
    ) -> CleanupExpiredTokensResponse:
        await self.principal_service.authorize_token_admin(
            request.context, "clean up admin tokens"
        )
        deleted = await self.admin_token_service.cleanup_expired()
        return CleanupExpiredTokensResponse(deleted=deleted)

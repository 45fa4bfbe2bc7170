"""List admin tokens use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from elevate.application.usecase.base import BaseUseCase
from elevate.config import Settings
from elevate.domain.model import CallerContext
from elevate.domain.service import AdminTokenService, PrincipalService
from elevate.domain.value import TokenStatus


class ListAdminTokensRequest(BaseModel):
    """List tokens request."""

    context: CallerContext


class AdminTokenItem(BaseModel):
    """Token as shown to operators."""

    token: str
    email: str
    status: TokenStatus
    issued_by: UUID
    issued_at: datetime
    expires_at: datetime
    consumed_at: datetime | None
    consumed_by: UUID | None
    registration_url: str


class ListAdminTokensResponse(BaseModel):
    """All tokens, newest first."""

    tokens: list[AdminTokenItem]


class ListAdminTokensUseCase(BaseUseCase):
    """Use case for operator review of issued tokens."""

    def __init__(
        self,
        admin_token_service: AdminTokenService,
        principal_service: PrincipalService,
        settings: Settings,
    ) -> None:
        self.admin_token_service = admin_token_service
        self.principal_service = principal_service
        self.settings = settings

    async def execute(self, request: ListAdminTokensRequest) -> ListAdminTokensResponse:
        await self.principal_service.authorize_token_admin(
            request.context, "list admin tokens"
        )
        listings = await self.admin_token_service.list_tokens()
        prefix = self.settings.registration_url_prefix
        return ListAdminTokensResponse(
            tokens=[
                AdminTokenItem(
                    token=listing.token.value.root,
                    email=listing.token.bound_email.root,
                    status=listing.status,
                    issued_by=listing.token.issued_by,
                    issued_at=listing.token.issued_at,
                    expires_at=listing.token.expires_at,
                    consumed_at=listing.token.consumed_at,
                    consumed_by=listing.token.consumed_by,
                    registration_url=prefix + listing.token.value.root,
                )
                for listing in listings
            ]
        )

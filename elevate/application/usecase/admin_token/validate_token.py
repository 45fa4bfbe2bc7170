"""Validate admin token use case."""

from pydantic import BaseModel

from elevate.application.usecase.base import BaseUseCase
from elevate.domain.service import AdminTokenService


class ValidateAdminTokenRequest(BaseModel):
    """Validate token request."""

    token: str


class ValidateAdminTokenResponse(BaseModel):
    """What the registration page may display."""

    email: str
    is_valid: bool


class ValidateAdminTokenUseCase(BaseUseCase):
    """Use case for checking a token before registration.

    Public and read-only; never consumes and never raises for unknown tokens.
    """

    def __init__(self, admin_token_service: AdminTokenService) -> None:
        self.admin_token_service = admin_token_service

    async def execute(
        self, request: ValidateAdminTokenRequest
    ) -> ValidateAdminTokenResponse:
        display = await self.admin_token_service.validate_for_display(request.token)
        return ValidateAdminTokenResponse(email=display.email, is_valid=display.is_valid)

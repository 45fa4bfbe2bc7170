"""Issue admin token use case."""

from datetime import datetime, timedelta

import logfire
from pydantic import BaseModel, Field

from elevate.application.usecase.base import BaseUseCase
from elevate.config import Settings
from elevate.domain.error import InvalidValidityWindowError
from elevate.domain.model import CallerContext
from elevate.domain.service import AdminTokenService, PrincipalService


class IssueAdminTokenRequest(BaseModel):
    """Request to issue an admin token."""

    context: CallerContext
    email: str
    # Presets are a UX concern; any positive number of days up to the maximum
    validity_days: int | None = Field(default=None)


class IssueAdminTokenResponse(BaseModel):
    """Issued token and the link to hand to the recipient."""

    token: str
    email: str
    expires_at: datetime
    registration_url: str


class IssueAdminTokenUseCase(BaseUseCase):
    """Use case for issuing an email-bound admin registration token."""

    def __init__(
        self,
        admin_token_service: AdminTokenService,
        principal_service: PrincipalService,
        settings: Settings,
    ) -> None:
        self.admin_token_service = admin_token_service
        self.principal_service = principal_service
        self.settings = settings

    async def execute(self, request: IssueAdminTokenRequest) -> IssueAdminTokenResponse:
        """Issue a token.

        Raises:
            NotAuthorizedError: Caller is not the operator or an admin
            InvalidEmailError: Email fails format validation
            InvalidValidityWindowError: validity_days is not positive or
                exceeds the configured maximum
        """
        with logfire.span("issue_admin_token.execute"):
            issued_by = await self.principal_service.authorize_token_admin(
                request.context, "issue admin tokens"
            )

            days = (
                request.validity_days
                if request.validity_days is not None
                else self.settings.admin_tokens.default_validity_days
            )
            if days <= 0:
                raise InvalidValidityWindowError()
            max_days = self.settings.admin_tokens.max_validity_days
            if days > max_days:
                raise InvalidValidityWindowError(
                    f"Validity window must be at most {max_days} days"
                )
            token = await self.admin_token_service.issue(
                request.email, timedelta(days=days), issued_by
            )

            return IssueAdminTokenResponse(
                token=token.value.root,
                email=token.bound_email.root,
                expires_at=token.expires_at,
                registration_url=self.settings.registration_url_prefix
                + token.value.root,
            )

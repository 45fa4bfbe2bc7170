"""Admin token routes.

Issuing, listing, deleting and cleaning up tokens is operator-only: the
X-Service-Key header or an admin principal's session. Validation is public
so the registration page can show the bound email before sign-up.
"""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Response, status
from pydantic import BaseModel, Field

from elevate.application.usecase.admin_token import (
    CleanupExpiredTokensRequest,
    CleanupExpiredTokensResponse,
    CleanupExpiredTokensUseCase,
    DeleteAdminTokenRequest,
    DeleteAdminTokenUseCase,
    IssueAdminTokenRequest,
    IssueAdminTokenResponse,
    IssueAdminTokenUseCase,
    ListAdminTokensRequest,
    ListAdminTokensResponse,
    ListAdminTokensUseCase,
    ValidateAdminTokenRequest,
    ValidateAdminTokenResponse,
    ValidateAdminTokenUseCase,
)
from elevate.domain.service import IdentityResolver
from elevate.interface.api.identity import SERVICE_KEY_HEADER, resolve_caller

router = APIRouter(prefix="/admin-tokens", tags=["admin-tokens"], route_class=DishkaRoute)


class IssueAdminTokenAPIRequest(BaseModel):
    """API request for issuing a token."""

    email: str = Field(max_length=255)
    validity_days: int | None = None


@router.post(
    "", response_model=IssueAdminTokenResponse, status_code=status.HTTP_201_CREATED
)
async def issue_admin_token(
    request: IssueAdminTokenAPIRequest,
    issue_use_case: FromDishka[IssueAdminTokenUseCase],
    resolver: FromDishka[IdentityResolver],
    auth_token: str | None = Cookie(default=None),
    service_key: str | None = Header(default=None, alias=SERVICE_KEY_HEADER),
) -> IssueAdminTokenResponse:
    """Issue an email-bound admin registration token.

    Example:
        POST /admin-tokens
        {"email": "new.admin@example.com", "validity_days": 7}

        Response:
        {
            "token": "3f1c...",
            "email": "new.admin@example.com",
            "expires_at": "2026-01-08T12:00:00Z",
            "registration_url": "https://example.com/register?token=3f1c..."
        }
    """
    context = resolve_caller(resolver, auth_token, service_key)
    return await issue_use_case.execute(
        IssueAdminTokenRequest(
            context=context,
            email=request.email,
            validity_days=request.validity_days,
        )
    )


@router.get("", response_model=ListAdminTokensResponse)
async def list_admin_tokens(
    list_use_case: FromDishka[ListAdminTokensUseCase],
    resolver: FromDishka[IdentityResolver],
    auth_token: str | None = Cookie(default=None),
    service_key: str | None = Header(default=None, alias=SERVICE_KEY_HEADER),
) -> ListAdminTokensResponse:
    """List every token with its status, newest first."""
    context = resolve_caller(resolver, auth_token, service_key)
    return await list_use_case.execute(ListAdminTokensRequest(context=context))


@router.post("/cleanup", response_model=CleanupExpiredTokensResponse)
async def cleanup_expired_admin_tokens(
    cleanup_use_case: FromDishka[CleanupExpiredTokensUseCase],
    resolver: FromDishka[IdentityResolver],
    auth_token: str | None = Cookie(default=None),
    service_key: str | None = Header(default=None, alias=SERVICE_KEY_HEADER),
) -> CleanupExpiredTokensResponse:
    """Delete expired tokens that were never used."""
    context = resolve_caller(resolver, auth_token, service_key)
    return await cleanup_use_case.execute(CleanupExpiredTokensRequest(context=context))


@router.get("/{token}/validate", response_model=ValidateAdminTokenResponse)
async def validate_admin_token(
    token: str,
    validate_use_case: FromDishka[ValidateAdminTokenUseCase],
) -> ValidateAdminTokenResponse:
    """Check a token without consuming it.

    Unknown tokens return {"email": "", "is_valid": false}, never 404.
    """
    return await validate_use_case.execute(ValidateAdminTokenRequest(token=token))


@router.delete("/{token}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_admin_token(
    token: str,
    delete_use_case: FromDishka[DeleteAdminTokenUseCase],
    resolver: FromDishka[IdentityResolver],
    auth_token: str | None = Cookie(default=None),
    service_key: str | None = Header(default=None, alias=SERVICE_KEY_HEADER),
) -> Response:
    """Revoke a token. Deleting an unknown token also returns 204."""
    context = resolve_caller(resolver, auth_token, service_key)
    await delete_use_case.execute(DeleteAdminTokenRequest(context=context, token=token))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

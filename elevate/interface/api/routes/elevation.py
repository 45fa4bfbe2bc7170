"""Elevation routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie
from pydantic import BaseModel, Field

from elevate.application.usecase.elevation import (
    ElevateViaTokenRequest,
    ElevateViaTokenUseCase,
)
from elevate.application.usecase.principal import PrincipalResponse
from elevate.domain.service import IdentityResolver
from elevate.interface.api.identity import resolve_caller

router = APIRouter(prefix="/elevation", tags=["elevation"], route_class=DishkaRoute)


class ElevateAPIRequest(BaseModel):
    """API request for redeeming a token.

    Deliberately carries no principal id or email; those come from the
    caller's session.
    """

    token: str = Field(min_length=1, max_length=255)


@router.post("", response_model=PrincipalResponse)
async def elevate_via_token(
    request: ElevateAPIRequest,
    elevate_use_case: FromDishka[ElevateViaTokenUseCase],
    resolver: FromDishka[IdentityResolver],
    auth_token: str | None = Cookie(default=None),
) -> PrincipalResponse:
    """Redeem an admin registration token for the signed-in principal.

    Error codes: TokenNotFound (404), TokenExpired (410),
    TokenAlreadyUsed (409), EmailMismatch (400),
    GrantAfterConsumeFailed (500, contact an operator).
    """
    context = resolve_caller(resolver, auth_token, None)
    return await elevate_use_case.execute(
        ElevateViaTokenRequest(context=context, token=request.token)
    )

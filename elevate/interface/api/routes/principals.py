"""Principal routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status
from pydantic import BaseModel, ConfigDict, Field

from elevate.application.usecase.elevation import (
    SetAdminFlagRequest,
    SetAdminFlagUseCase,
)
from elevate.application.usecase.principal import (
    GetPrincipalRequest,
    GetPrincipalUseCase,
    PrincipalResponse,
    RegisterPrincipalRequest,
    RegisterPrincipalUseCase,
    UpdatePrincipalRequest,
    UpdatePrincipalUseCase,
)
from elevate.domain.service import IdentityResolver
from elevate.interface.api.identity import SERVICE_KEY_HEADER, resolve_caller

router = APIRouter(prefix="/principals", tags=["principals"], route_class=DishkaRoute)


class RegisterPrincipalAPIRequest(BaseModel):
    """API request for creating a principal record.

    id and email are only honoured for the operator; a signed-in principal
    always registers itself.
    """

    id: UUID | None = None
    email: str | None = None
    display_name: str | None = Field(default=None, max_length=100)
    is_admin: bool = False


class UpdatePrincipalAPIRequest(BaseModel):
    """API request for updating a principal record.

    Unknown keys are passed on so the domain can reject them by name.
    """

    model_config = ConfigDict(extra="allow")

    display_name: str | None = Field(default=None, max_length=100)
    avatar_url: str | None = None
    is_admin: bool | None = None


class SetAdminFlagAPIRequest(BaseModel):
    """API request for the operator grant or revoke."""

    is_admin: bool


@router.post(
    "", response_model=PrincipalResponse, status_code=status.HTTP_201_CREATED
)
async def register_principal(
    request: RegisterPrincipalAPIRequest,
    register_use_case: FromDishka[RegisterPrincipalUseCase],
    resolver: FromDishka[IdentityResolver],
    auth_token: str | None = Cookie(default=None),
    service_key: str | None = Header(default=None, alias=SERVICE_KEY_HEADER),
) -> PrincipalResponse:
    """Create the principal record after identity-provider sign-up."""
    context = resolve_caller(resolver, auth_token, service_key)
    return await register_use_case.execute(
        RegisterPrincipalRequest(
            context=context,
            principal_id=request.id,
            email=request.email,
            display_name=request.display_name,
            is_admin=request.is_admin,
        )
    )


@router.get("/{principal_id}", response_model=PrincipalResponse)
async def get_principal(
    principal_id: UUID,
    get_use_case: FromDishka[GetPrincipalUseCase],
    resolver: FromDishka[IdentityResolver],
    auth_token: str | None = Cookie(default=None),
    service_key: str | None = Header(default=None, alias=SERVICE_KEY_HEADER),
) -> PrincipalResponse:
    """Read a principal record (owner or operator)."""
    context = resolve_caller(resolver, auth_token, service_key)
    return await get_use_case.execute(
        GetPrincipalRequest(context=context, principal_id=principal_id)
    )


@router.patch("/{principal_id}", response_model=PrincipalResponse)
async def update_principal(
    principal_id: UUID,
    request: UpdatePrincipalAPIRequest,
    update_use_case: FromDishka[UpdatePrincipalUseCase],
    resolver: FromDishka[IdentityResolver],
    auth_token: str | None = Cookie(default=None),
    service_key: str | None = Header(default=None, alias=SERVICE_KEY_HEADER),
) -> PrincipalResponse:
    """Update a principal record.

    Sending is_admin as an ordinary principal returns 403
    SelfElevationForbidden and leaves the record unchanged.
    """
    context = resolve_caller(resolver, auth_token, service_key)
    return await update_use_case.execute(
        UpdatePrincipalRequest(
            context=context,
            principal_id=principal_id,
            fields=request.model_dump(exclude_unset=True),
        )
    )


@router.post("/{principal_id}/admin", response_model=PrincipalResponse)
async def set_admin_flag(
    principal_id: UUID,
    request: SetAdminFlagAPIRequest,
    set_admin_use_case: FromDishka[SetAdminFlagUseCase],
    resolver: FromDishka[IdentityResolver],
    auth_token: str | None = Cookie(default=None),
    service_key: str | None = Header(default=None, alias=SERVICE_KEY_HEADER),
) -> PrincipalResponse:
    """Grant or revoke admin directly. Operator only."""
    context = resolve_caller(resolver, auth_token, service_key)
    return await set_admin_use_case.execute(
        SetAdminFlagRequest(
            context=context, principal_id=principal_id, is_admin=request.is_admin
        )
    )

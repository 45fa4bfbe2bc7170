"""Get principal use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from elevate.application.usecase.base import BaseUseCase
from elevate.domain.model import CallerContext, Principal
from elevate.domain.service import PrincipalService
from elevate.domain.value import PrincipalId


class GetPrincipalRequest(BaseModel):
    """Get principal request."""

    context: CallerContext
    principal_id: UUID


class PrincipalResponse(BaseModel):
    """Principal record as returned by the API."""

    id: UUID
    email: str
    display_name: str | None
    avatar_url: str | None
    is_admin: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_principal(cls, principal: Principal) -> "PrincipalResponse":
        return cls(
            id=principal.id,
            email=principal.email.root,
            display_name=principal.display_name,
            avatar_url=principal.avatar_url,
            is_admin=principal.is_admin,
            created_at=principal.created_at,
            updated_at=principal.updated_at,
        )


class GetPrincipalUseCase(BaseUseCase):
    """Use case for reading a principal record."""

    def __init__(self, principal_service: PrincipalService) -> None:
        self.principal_service = principal_service

    async def execute(self, request: GetPrincipalRequest) -> PrincipalResponse:
        principal = await self.principal_service.get_principal(
            PrincipalId(request.principal_id), request.context
        )
        return PrincipalResponse.from_principal(principal)

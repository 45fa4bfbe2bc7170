"""Update principal use case."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel

from elevate.application.usecase.base import BaseUseCase
from elevate.application.usecase.principal.get_principal import PrincipalResponse
from elevate.domain.model import CallerContext
from elevate.domain.service import PrincipalService
from elevate.domain.value import PrincipalId


class UpdatePrincipalRequest(BaseModel):
    """Update principal request.

    fields holds only the keys the caller sent, so an omitted field is left
    alone and an explicit null clears it.
    """

    context: CallerContext
    principal_id: UUID
    fields: dict[str, Any]


class UpdatePrincipalUseCase(BaseUseCase):
    """Use case for updating a principal record.

    is_admin is passed through untouched so the privilege guard, not this
    layer, decides whether the change is allowed.
    """

    def __init__(self, principal_service: PrincipalService) -> None:
        self.principal_service = principal_service

    async def execute(self, request: UpdatePrincipalRequest) -> PrincipalResponse:
        principal = await self.principal_service.update_principal(
            PrincipalId(request.principal_id), request.fields, request.context
        )
        return PrincipalResponse.from_principal(principal)

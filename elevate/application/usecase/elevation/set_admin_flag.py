"""Set admin flag use case."""

from uuid import UUID

from pydantic import BaseModel

from elevate.application.usecase.base import BaseUseCase
from elevate.application.usecase.principal.get_principal import PrincipalResponse
from elevate.domain.model import CallerContext
from elevate.domain.service import ElevationService
from elevate.domain.value import PrincipalId


class SetAdminFlagRequest(BaseModel):
    """Operator grant or revoke request."""

    context: CallerContext
    principal_id: UUID
    is_admin: bool


class SetAdminFlagUseCase(BaseUseCase):
    """Use case for the operator's direct grant or revoke.

    Also the remediation path when a grant failed after token consumption.
    """

    def __init__(self, elevation_service: ElevationService) -> None:
        self.elevation_service = elevation_service

    async def execute(self, request: SetAdminFlagRequest) -> PrincipalResponse:
        principal = await self.elevation_service.set_admin_flag(
            PrincipalId(request.principal_id), request.is_admin, request.context
        )
        return PrincipalResponse.from_principal(principal)

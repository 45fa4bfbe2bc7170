"""Register principal use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from elevate.application.usecase.base import BaseUseCase
from elevate.application.usecase.principal.get_principal import PrincipalResponse
from elevate.domain.error import NotAuthorizedError
from elevate.domain.model import CallerContext
from elevate.domain.service import PrincipalService, parse_email
from elevate.domain.value import PrincipalId


class RegisterPrincipalRequest(BaseModel):
    """Register principal request.

    An ordinary principal registers itself, so id and email come from its
    verified identity. The operator may register any id and email.
    """

    context: CallerContext
    principal_id: UUID | None = None
    email: str | None = None
    display_name: str | None = Field(default=None, max_length=100)
    is_admin: bool = False


class RegisterPrincipalUseCase(BaseUseCase):
    """Use case for creating a principal record."""

    def __init__(self, principal_service: PrincipalService) -> None:
        self.principal_service = principal_service

    async def execute(self, request: RegisterPrincipalRequest) -> PrincipalResponse:
        """Create the record.

        Raises:
            NotAuthorizedError: Anonymous caller, or a principal registering
                an id other than its own
            InvalidEmailError: Operator supplied a malformed email
            PrincipalExistsError: Record already exists
            SelfElevationForbiddenError: Non-operator asked for is_admin=True
        """
        context = request.context
        current = context.current_principal()

        if current is not None:
            own_id, own_email = current
            principal_id = (
                PrincipalId(request.principal_id) if request.principal_id else own_id
            )
            email = own_email
        elif context.is_trusted_operator:
            if request.principal_id is None or request.email is None:
                raise NotAuthorizedError("register a principal without id and email")
            principal_id = PrincipalId(request.principal_id)
            email = parse_email(request.email)
        else:
            raise NotAuthorizedError("register a principal", anonymous=True)

        principal = await self.principal_service.register_principal(
            principal_id,
            email,
            request.display_name,
            context,
            is_admin=request.is_admin,
        )
        return PrincipalResponse.from_principal(principal)

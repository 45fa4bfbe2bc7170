"""Principal use cases."""

from elevate.application.usecase.principal.get_principal import (
    GetPrincipalRequest,
    GetPrincipalUseCase,
    PrincipalResponse,
)
from elevate.application.usecase.principal.register_principal import (
    RegisterPrincipalRequest,
    RegisterPrincipalUseCase,
)
from elevate.application.usecase.principal.update_principal import (
    UpdatePrincipalRequest,
    UpdatePrincipalUseCase,
)

__all__ = [
    "GetPrincipalRequest",
    "GetPrincipalUseCase",
    "PrincipalResponse",
    "RegisterPrincipalRequest",
    "RegisterPrincipalUseCase",
    "UpdatePrincipalRequest",
    "UpdatePrincipalUseCase",
]

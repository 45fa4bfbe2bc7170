"""Elevation use cases."""

from elevate.application.usecase.elevation.elevate_via_token import (
    ElevateViaTokenRequest,
    ElevateViaTokenUseCase,
)
from elevate.application.usecase.elevation.set_admin_flag import (
    SetAdminFlagRequest,
    SetAdminFlagUseCase,
)

__all__ = [
    "ElevateViaTokenRequest",
    "ElevateViaTokenUseCase",
    "SetAdminFlagRequest",
    "SetAdminFlagUseCase",
]

"""Repository interfaces.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from elevate.domain.repository.admin_token import AdminTokenRepository
from elevate.domain.repository.principal import BeforeWriteHook, PrincipalRepository

__all__ = [
    "AdminTokenRepository",
    "BeforeWriteHook",
    "PrincipalRepository",
]

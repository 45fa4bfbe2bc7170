"""Domain value objects."""

from elevate.domain.value.identifiers import PrincipalId
from elevate.domain.value.types import CallerKind, Email, TokenStatus, TokenValue

__all__ = [
    # Identifiers
    "PrincipalId",
    # Types
    "CallerKind",
    "Email",
    "TokenStatus",
    "TokenValue",
]

"""In-memory repository implementations for testing."""

from .admin_token import InMemoryAdminTokenRepository
from .principal import InMemoryPrincipalRepository

__all__ = [
    "InMemoryAdminTokenRepository",
    "InMemoryPrincipalRepository",
]

"""PostgreSQL repository implementations."""

from elevate.persistence.repository.admin_token import PostgresAdminTokenRepository
from elevate.persistence.repository.principal import PostgresPrincipalRepository

__all__ = [
    "PostgresAdminTokenRepository",
    "PostgresPrincipalRepository",
]

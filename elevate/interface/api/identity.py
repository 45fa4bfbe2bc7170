"""Request credential handling shared by the routes."""

from elevate.domain.model import CallerContext
from elevate.domain.service import IdentityResolver

SERVICE_KEY_HEADER = "X-Service-Key"


def resolve_caller(
    resolver: IdentityResolver,
    auth_token: str | None,
    service_key: str | None,
) -> CallerContext:
    """Build the caller context from the auth_token cookie and service key header.

    Raises:
        InvalidCredentialsError: If a presented credential does not verify
    """
    return resolver.resolve(auth_token, service_key)

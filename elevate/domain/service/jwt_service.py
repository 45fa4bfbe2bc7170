"""JWT token domain service."""

import logfire

from elevate.config import AuthSettings
from elevate.util.jwt import TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for session token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, principal_id: str, email: str) -> str:
        """Create a session token for a principal."""
        with logfire.span("jwt_service.create_token", principal_id=principal_id):
            token = create_token(principal_id, email, self.auth_settings)
            logfire.info("JWT token created", principal_id=principal_id)
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify a session token and extract its payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
            except Exception as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise
            logfire.info("JWT token verified", principal_id=payload.principal_id)
            return payload

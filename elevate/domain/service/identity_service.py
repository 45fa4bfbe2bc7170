"""Caller identity resolution.

Turns request credentials into a CallerContext. Two credential kinds are
understood:

- a session token (JWT) from the identity provider, giving an ordinary
  principal context
- the backend service key, giving the trusted operator context

The service key never travels inside a session token, so no login can
produce the operator context.
"""

import hmac
from uuid import UUID

import logfire
from pydantic import ValidationError as PydanticValidationError

from elevate.config import AuthSettings
from elevate.domain.error import InvalidCredentialsError
from elevate.domain.model import CallerContext
from elevate.domain.value import Email, PrincipalId
from elevate.util.jwt import JWTError

from .base import Service
from .jwt_service import JWTService


class IdentityResolver(Service):
    """Resolves request credentials into a caller context."""

    def __init__(self, jwt_service: JWTService, auth_settings: AuthSettings) -> None:
        self.jwt_service = jwt_service
        self.auth_settings = auth_settings

    def _is_service_key(self, presented: str) -> bool:
        configured = self.auth_settings.service_key
        if not configured:
            return False
        return hmac.compare_digest(presented.encode(), configured.encode())

    def resolve(
        self, auth_token: str | None, service_key: str | None = None
    ) -> CallerContext:
        """Resolve credentials into a caller context.

        A service key takes precedence over a session token. Presenting a
        credential that does not verify is an error, never a silent
        downgrade to anonymous.

        Args:
            auth_token: Session token, if any
            service_key: Backend service key, if any

        Returns:
            Caller context

        Raises:
            InvalidCredentialsError: If a presented credential is invalid
        """
        if service_key:
            if not self._is_service_key(service_key):
                logfire.warn("Invalid service key presented")
                raise InvalidCredentialsError("Invalid service key")
            logfire.info("Trusted operator context resolved")
            return CallerContext.trusted_operator(
                PrincipalId(self.auth_settings.service_principal_id)
            )

        if not auth_token:
            return CallerContext.anonymous()

        try:
            payload = self.jwt_service.verify_token(auth_token)
        except JWTError as e:
            raise InvalidCredentialsError(str(e))

        try:
            principal_id = PrincipalId(UUID(payload.principal_id))
            email = Email(payload.email)
        except (ValueError, PydanticValidationError):
            raise InvalidCredentialsError("Token carries an invalid identity")

        return CallerContext.principal(principal_id, email)

"""Domain layer DI providers."""

from dishka import Scope, provide

from elevate.config import AuthSettings
from elevate.domain.repository import AdminTokenRepository, PrincipalRepository
from elevate.domain.service import (
    AdminTokenService,
    ElevationService,
    IdentityResolver,
    JWTService,
    PrincipalService,
)
from elevate.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_identity_resolver(
        self, jwt_service: JWTService, auth_settings: AuthSettings
    ) -> IdentityResolver:
        """Provide caller identity resolver."""
        return IdentityResolver(jwt_service=jwt_service, auth_settings=auth_settings)

    @provide
    def get_admin_token_service(
        self, admin_token_repository: AdminTokenRepository
    ) -> AdminTokenService:
        """Provide admin token domain service."""
        return AdminTokenService(admin_token_repository=admin_token_repository)

    @provide
    def get_principal_service(
        self, principal_repository: PrincipalRepository
    ) -> PrincipalService:
        """Provide principal domain service."""
        return PrincipalService(principal_repository=principal_repository)

    @provide
    def get_elevation_service(
        self,
        admin_token_service: AdminTokenService,
        principal_repository: PrincipalRepository,
        auth_settings: AuthSettings,
    ) -> ElevationService:
        """Provide elevation domain service."""
        return ElevationService(
            admin_token_service=admin_token_service,
            principal_repository=principal_repository,
            auth_settings=auth_settings,
        )

"""Application layer DI providers."""

from dishka import Scope, provide

from elevate.application.usecase.admin_token import (
    CleanupExpiredTokensUseCase,
    DeleteAdminTokenUseCase,
    IssueAdminTokenUseCase,
    ListAdminTokensUseCase,
    ValidateAdminTokenUseCase,
)
from elevate.application.usecase.elevation import (
    ElevateViaTokenUseCase,
    SetAdminFlagUseCase,
)
from elevate.application.usecase.principal import (
    GetPrincipalUseCase,
    RegisterPrincipalUseCase,
    UpdatePrincipalUseCase,
)
from elevate.config import Settings
from elevate.domain.service import (
    AdminTokenService,
    ElevationService,
    PrincipalService,
)
from elevate.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Admin token use cases
    @provide(scope=Scope.REQUEST)
    def get_issue_admin_token_use_case(
        self,
        admin_token_service: AdminTokenService,
        principal_service: PrincipalService,
        settings: Settings,
    ) -> IssueAdminTokenUseCase:
        """Provide issue admin token use case."""
        return IssueAdminTokenUseCase(
            admin_token_service=admin_token_service,
            principal_service=principal_service,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_validate_admin_token_use_case(
        self, admin_token_service: AdminTokenService
    ) -> ValidateAdminTokenUseCase:
        """Provide validate admin token use case."""
        return ValidateAdminTokenUseCase(admin_token_service=admin_token_service)

    @provide(scope=Scope.REQUEST)
    def get_list_admin_tokens_use_case(
        self,
        admin_token_service: AdminTokenService,
        principal_service: PrincipalService,
        settings: Settings,
    ) -> ListAdminTokensUseCase:
        """Provide list admin tokens use case."""
        return ListAdminTokensUseCase(
            admin_token_service=admin_token_service,
            principal_service=principal_service,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_admin_token_use_case(
        self,
        admin_token_service: AdminTokenService,
        principal_service: PrincipalService,
    ) -> DeleteAdminTokenUseCase:
        """Provide delete admin token use case."""
        return DeleteAdminTokenUseCase(
            admin_token_service=admin_token_service,
            principal_service=principal_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_cleanup_expired_tokens_use_case(
        self,
        admin_token_service: AdminTokenService,
        principal_service: PrincipalService,
    ) -> CleanupExpiredTokensUseCase:
        """Provide cleanup expired tokens use case."""
        return CleanupExpiredTokensUseCase(
            admin_token_service=admin_token_service,
            principal_service=principal_service,
        )

    # Elevation use cases
    @provide(scope=Scope.REQUEST)
    def get_elevate_via_token_use_case(
        self, elevation_service: ElevationService
    ) -> ElevateViaTokenUseCase:
        """Provide elevate via token use case."""
        return ElevateViaTokenUseCase(elevation_service=elevation_service)

    @provide(scope=Scope.REQUEST)
    def get_set_admin_flag_use_case(
        self, elevation_service: ElevationService
    ) -> SetAdminFlagUseCase:
        """Provide set admin flag use case."""
        return SetAdminFlagUseCase(elevation_service=elevation_service)

    # Principal use cases
    @provide(scope=Scope.REQUEST)
    def get_register_principal_use_case(
        self, principal_service: PrincipalService
    ) -> RegisterPrincipalUseCase:
        """Provide register principal use case."""
        return RegisterPrincipalUseCase(principal_service=principal_service)

    @provide(scope=Scope.REQUEST)
    def get_get_principal_use_case(
        self, principal_service: PrincipalService
    ) -> GetPrincipalUseCase:
        """Provide get principal use case."""
        return GetPrincipalUseCase(principal_service=principal_service)

    @provide(scope=Scope.REQUEST)
    def get_update_principal_use_case(
        self, principal_service: PrincipalService
    ) -> UpdatePrincipalUseCase:
        """Provide update principal use case."""
        return UpdatePrincipalUseCase(principal_service=principal_service)

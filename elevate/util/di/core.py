"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from elevate.config import AuthSettings, Settings
from elevate.domain.service import PrivilegeGuard
from elevate.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_privilege_guard(self) -> PrivilegeGuard:
        """Provide the principal before-write hook.

        Stateless, so one instance serves every repository.
        """
        return PrivilegeGuard()

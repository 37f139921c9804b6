"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from credo.config import AuthSettings, MailSettings, OAuthSettings, Settings
from credo.util.di.base import ProviderBase


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
    def provide_oauth_settings(self, settings: Settings) -> OAuthSettings:
        """Provide OAuth provider settings."""
        return settings.oauth

    @provide(scope=Scope.APP)
    def provide_mail_settings(self, settings: Settings) -> MailSettings:
        """Provide SMTP settings."""
        return settings.mail

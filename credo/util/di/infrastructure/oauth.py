"""OAuth infrastructure providers for multi-provider authentication."""

from dishka import Scope, provide

from credo.adapter.oauth.providers import build_oauth_clients
from credo.config import OAuthSettings
from credo.domain.service import OAuthClient
from credo.domain.value import AuthProvider
from credo.util.di.base import ProviderBase


class OAuthProvider(ProviderBase):
    """OAuth component base."""

    __mock_component__ = "oauth"


class ProdOAuthProvider(OAuthProvider):
    """Production OAuth provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_oauth_clients(
        self, oauth_settings: OAuthSettings
    ) -> dict[AuthProvider, OAuthClient]:
        """Provide clients for every provider with credentials configured.

        APP scope: clients hold outstanding OAuth states between the
        redirect and the callback.

        Returns:
            Dictionary mapping AuthProvider to OAuthClient
        """
        return build_oauth_clients(oauth_settings)

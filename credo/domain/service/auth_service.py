"""Authentication domain service."""

from credo.domain.error import NotFoundError
from credo.domain.value import AuthProvider, ExternalProfile

from .base import Service


class OAuthClient:
    """Generic OAuth client interface for all providers."""

    async def initiate_authorization(self, state: str) -> str:
        """Initiate OAuth authorization flow.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        raise NotImplementedError

    async def complete_authorization(self, code: str, state: str) -> ExternalProfile:
        """Complete OAuth authorization flow.

        Args:
            code: Authorization code from OAuth callback
            state: State parameter for verification

        Returns:
            Normalized provider profile
        """
        raise NotImplementedError


class AuthService(Service):
    """Domain service for multi-provider OAuth handshakes.

    Only providers with configured credentials are present in
    ``oauth_clients``.
    """

    def __init__(self, oauth_clients: dict[AuthProvider, OAuthClient]) -> None:
        """Initialize auth service.

        Args:
            oauth_clients: Map of provider to OAuth client implementation
        """
        self.oauth_clients = oauth_clients

    @property
    def enabled_providers(self) -> list[AuthProvider]:
        return list(self.oauth_clients)

    def _client(self, provider: AuthProvider) -> OAuthClient:
        client = self.oauth_clients.get(provider)
        if not client:
            raise NotFoundError("OAuth provider", provider.value)
        return client

    async def initiate_login(self, provider: AuthProvider, state: str) -> str:
        """Initiate OAuth login flow for any provider.

        Args:
            provider: Authentication provider to use
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to

        Raises:
            NotFoundError: If provider is not enabled
        """
        return await self._client(provider).initiate_authorization(state)

    async def complete_login(
        self, provider: AuthProvider, code: str, state: str
    ) -> ExternalProfile:
        """Complete OAuth login flow for any provider.

        Args:
            provider: Authentication provider used
            code: Authorization code from OAuth callback
            state: State parameter for verification

        Returns:
            Normalized profile from the provider

        Raises:
            NotFoundError: If provider is not enabled
        """
        return await self._client(provider).complete_authorization(code, state)

"""OAuth 2.0 authorization-code client.

One implementation serves every provider; what differs per provider is
the endpoints, the scope and how the user-info document is read.
"""

import time
from dataclasses import dataclass
from typing import Any, Callable
from urllib.parse import urlencode

import httpx
import logfire

from credo.adapter.error import ProviderError
from credo.domain.service.auth_service import OAuthClient
from credo.domain.value import AuthProvider, ExternalProfile

# Seconds a user has to come back from the provider
STATE_TTL_SECONDS = 600


@dataclass(frozen=True)
class ProviderEndpoints:
    """Static OAuth description of one provider."""

    provider: AuthProvider
    authorize_url: str
    token_url: str
    user_info_url: str
    scope: str
    # Turns the user-info JSON into a profile
    normalize: Callable[[dict[str, Any]], ExternalProfile]
    extra_authorize_params: tuple[tuple[str, str], ...] = ()


class RealOAuthClient(OAuthClient):
    """OAuth 2.0 authorization-code flow over httpx."""

    def __init__(
        self,
        endpoints: ProviderEndpoints,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
    ) -> None:
        """Initialize OAuth client.

        Args:
            endpoints: Provider description
            client_id: OAuth client ID
            client_secret: OAuth client secret
            redirect_uri: Callback URL registered with the provider
        """
        self.endpoints = endpoints
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri

        # Outstanding states and when they were issued (single node)
        self._states: dict[str, float] = {}

    @property
    def provider(self) -> AuthProvider:
        return self.endpoints.provider

    def _prune_states(self) -> None:
        cutoff = time.monotonic() - STATE_TTL_SECONDS
        for state in [s for s, issued in self._states.items() if issued < cutoff]:
            del self._states[state]

    async def initiate_authorization(self, state: str) -> str:
        """Build the provider's authorization URL.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        self._prune_states()
        self._states[state] = time.monotonic()

        params = {
            "response_type": "code",
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": self.endpoints.scope,
            "state": state,
            **dict(self.endpoints.extra_authorize_params),
        }

        logfire.info(
            "OAuth authorization initiated",
            provider=self.provider.value,
            redirect_uri=self.redirect_uri,
        )
        return f"{self.endpoints.authorize_url}?{urlencode(params)}"

    async def complete_authorization(self, code: str, state: str) -> ExternalProfile:
        """Exchange the code and fetch the user's profile.

        Args:
            code: Authorization code from the callback
            state: State parameter from the callback

        Returns:
            Normalized provider profile

        Raises:
            ProviderError: Unknown state, failed exchange or unusable profile
        """
        self._prune_states()
        if self._states.pop(state, None) is None:
            raise ProviderError("Invalid or expired OAuth state")

        access_token = await self._exchange_code_for_token(code)
        user_info = await self._get_user_info(access_token)

        try:
            profile = self.endpoints.normalize(user_info)
        except (KeyError, TypeError, ValueError) as e:
            logfire.error(
                "Unusable OAuth profile", provider=self.provider.value, error=str(e)
            )
            raise ProviderError(f"Unusable {self.provider.value} profile: {e}") from e

        logfire.info(
            "OAuth authorization completed",
            provider=self.provider.value,
            external_id=profile.external_id,
        )
        return profile

    async def _exchange_code_for_token(self, code: str) -> str:
        """Exchange authorization code for access token.

        Raises:
            ProviderError: If token exchange fails
        """
        data = {
            "code": code,
            "grant_type": "authorization_code",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": self.redirect_uri,
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.endpoints.token_url,
                    data=data,
                    headers={"Accept": "application/json"},
                    timeout=30.0,
                )
        except httpx.HTTPError as e:
            logfire.error(
                "OAuth token exchange HTTP error",
                provider=self.provider.value,
                error=str(e),
            )
            raise ProviderError(f"HTTP error during token exchange: {e}") from e

        if response.status_code != 200:
            logfire.error(
                "OAuth token exchange failed",
                provider=self.provider.value,
                status_code=response.status_code,
                error=response.text,
            )
            raise ProviderError(f"Token exchange failed: {response.status_code}")

        access_token = self._json_body(response, "token").get("access_token")
        if not access_token:
            raise ProviderError("Token response carried no access token")
        return access_token

    async def _get_user_info(self, access_token: str) -> dict[str, Any]:
        """Fetch the user-info document.

        Raises:
            ProviderError: If the request fails
        """
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    self.endpoints.user_info_url,
                    headers={"Authorization": f"Bearer {access_token}"},
                    timeout=30.0,
                )
        except httpx.HTTPError as e:
            logfire.error(
                "OAuth user info HTTP error", provider=self.provider.value, error=str(e)
            )
            raise ProviderError(f"HTTP error fetching user info: {e}") from e

        if response.status_code != 200:
            logfire.error(
                "OAuth user info request failed",
                provider=self.provider.value,
                status_code=response.status_code,
                error=response.text,
            )
            raise ProviderError(f"User info request failed: {response.status_code}")

        return self._json_body(response, "user info")

    def _json_body(self, response: httpx.Response, what: str) -> dict[str, Any]:
        """Decode a 200 response that must be a JSON object.

        Raises:
            ProviderError: If the body is not a JSON object
        """
        try:
            body = response.json()
        except ValueError as e:
            logfire.error(
                "OAuth response is not JSON",
                provider=self.provider.value,
                response=what,
                content_type=response.headers.get("content-type"),
            )
            raise ProviderError(f"Malformed {what} response") from e
        if not isinstance(body, dict):
            raise ProviderError(f"Malformed {what} response")
        return body


class MockOAuthClient(OAuthClient):
    """Mock OAuth client for testing.

    Returns a configurable profile without making real API calls. The
    authorization code ``"fail"`` simulates a provider failure.
    """

    def __init__(self, provider: AuthProvider, profile: ExternalProfile | None = None):
        """Initialize mock client without real OAuth configuration."""
        self.provider = provider
        self.profile = profile or ExternalProfile(
            provider=provider,
            external_id=f"mock-{provider.value}-123",
            email=f"mock@{provider.value}.example.com",
            display_name=f"Mock {provider.value.title()} User",
            first_name="Mock",
            last_name="User",
        )

    async def initiate_authorization(self, state: str) -> str:
        """Return mock authorization URL."""
        return f"https://{self.provider.value}.example.com/authorize?state={state}&mock=true"

    async def complete_authorization(self, code: str, state: str) -> ExternalProfile:
        """Return the configured profile."""
        if code == "fail":
            raise ProviderError("Mock provider failure")
        return self.profile

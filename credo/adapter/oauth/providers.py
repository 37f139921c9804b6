"""Provider-specific OAuth endpoints and profile normalizers."""

from typing import Any

import logfire

from credo.adapter.oauth.client import ProviderEndpoints, RealOAuthClient
from credo.config import OAuthClientSettings, OAuthSettings
from credo.domain.service.auth_service import OAuthClient
from credo.domain.value import AuthProvider, ExternalProfile
from credo.util.error import ConfigurationError


def _required_email(value: str | None) -> str:
    if not value:
        raise ValueError("provider returned no email address")
    return value


def normalize_google(data: dict[str, Any]) -> ExternalProfile:
    """OpenID Connect userinfo document."""
    return ExternalProfile(
        provider=AuthProvider.GOOGLE,
        external_id=str(data["sub"]),
        email=_required_email(data.get("email")),
        email_verified=bool(data.get("email_verified", False)),
        display_name=data.get("name"),
        first_name=data.get("given_name"),
        last_name=data.get("family_name"),
        avatar_url=data.get("picture"),
    )


def normalize_microsoft(data: dict[str, Any]) -> ExternalProfile:
    """Microsoft Graph ``/me`` document.

    ``mail`` is managed by the tenant; the ``userPrincipalName`` fallback
    is a sign-in name, so it is not trusted for linking.
    """
    mail = data.get("mail")
    return ExternalProfile(
        provider=AuthProvider.MICROSOFT,
        external_id=str(data["id"]),
        email=_required_email(mail or data.get("userPrincipalName")),
        email_verified=bool(mail),
        display_name=data.get("displayName"),
        first_name=data.get("givenName"),
        last_name=data.get("surname"),
    )


def normalize_amazon(data: dict[str, Any]) -> ExternalProfile:
    """Login with Amazon ``/user/profile`` document."""
    return ExternalProfile(
        provider=AuthProvider.AMAZON,
        external_id=str(data["user_id"]),
        email=_required_email(data.get("email")),
        display_name=data.get("name"),
    )


def normalize_idme(data: dict[str, Any]) -> ExternalProfile:
    """ID.me attributes document.

    Attributes arrive as a list of ``{"handle", "value"}`` pairs; the
    affiliation is the first verified group in ``status``.
    """
    attributes = {a["handle"]: a.get("value") for a in data.get("attributes", [])}
    affiliation = next(
        (s.get("group") for s in data.get("status", []) if s.get("verified")),
        None,
    )
    first_name = attributes.get("fname")
    last_name = attributes.get("lname")
    display_name = " ".join(n for n in (first_name, last_name) if n) or None
    return ExternalProfile(
        provider=AuthProvider.IDME,
        external_id=str(attributes["uuid"]),
        email=_required_email(attributes.get("email")),
        display_name=display_name,
        first_name=first_name,
        last_name=last_name,
        affiliation=affiliation,
    )


PROVIDER_ENDPOINTS: dict[AuthProvider, ProviderEndpoints] = {
    AuthProvider.GOOGLE: ProviderEndpoints(
        provider=AuthProvider.GOOGLE,
        authorize_url="https://accounts.google.com/o/oauth2/v2/auth",
        token_url="https://oauth2.googleapis.com/token",
        user_info_url="https://openidconnect.googleapis.com/v1/userinfo",
        scope="openid email profile",
        normalize=normalize_google,
    ),
    AuthProvider.MICROSOFT: ProviderEndpoints(
        provider=AuthProvider.MICROSOFT,
        authorize_url="https://login.microsoftonline.com/common/oauth2/v2.0/authorize",
        token_url="https://login.microsoftonline.com/common/oauth2/v2.0/token",
        user_info_url="https://graph.microsoft.com/v1.0/me",
        scope="openid email profile User.Read",
        normalize=normalize_microsoft,
    ),
    AuthProvider.AMAZON: ProviderEndpoints(
        provider=AuthProvider.AMAZON,
        authorize_url="https://www.amazon.com/ap/oa",
        token_url="https://api.amazon.com/auth/o2/token",
        user_info_url="https://api.amazon.com/user/profile",
        scope="profile",
        normalize=normalize_amazon,
    ),
    AuthProvider.IDME: ProviderEndpoints(
        provider=AuthProvider.IDME,
        authorize_url="https://api.id.me/oauth/authorize",
        token_url="https://api.id.me/oauth/token",
        user_info_url="https://api.id.me/api/public/v3/attributes.json",
        scope="military disability student responder veteran",
        normalize=normalize_idme,
    ),
}


def build_oauth_clients(settings: OAuthSettings) -> dict[AuthProvider, OAuthClient]:
    """Create a client for every provider with credentials configured.

    Args:
        settings: OAuth settings

    Returns:
        Map of enabled provider to client

    Raises:
        ConfigurationError: If an enabled provider has no callback URL
    """
    clients: dict[AuthProvider, OAuthClient] = {}
    for provider, endpoints in PROVIDER_ENDPOINTS.items():
        client_settings: OAuthClientSettings = getattr(settings, provider.value)
        if not client_settings.enabled:
            continue
        if not client_settings.callback_url:
            raise ConfigurationError(f"{provider.value} OAuth callback URL not set")

        clients[provider] = RealOAuthClient(
            endpoints=endpoints,
            client_id=client_settings.client_id,
            client_secret=client_settings.client_secret,
            redirect_uri=client_settings.callback_url,
        )

    logfire.info(
        "OAuth providers enabled", providers=[p.value for p in clients]
    )
    return clients

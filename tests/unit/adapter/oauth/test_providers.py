"""Unit tests for provider profile normalizers."""

import pytest

from credo.adapter.oauth.providers import (
    build_oauth_clients,
    normalize_amazon,
    normalize_google,
    normalize_idme,
    normalize_microsoft,
)
from credo.config import OAuthClientSettings, OAuthSettings, Settings
from credo.domain.value import AuthProvider
from credo.util.error import ConfigurationError


class TestNormalizeGoogle:
    """Tests for normalize_google()."""

    def test_full_profile(self):
        profile = normalize_google(
            {
                "sub": "110248495921238986420",
                "email": "Alice@Gmail.com",
                "email_verified": True,
                "name": "Alice Liddell",
                "given_name": "Alice",
                "family_name": "Liddell",
                "picture": "https://lh3.googleusercontent.com/a/alice",
            }
        )

        assert profile.provider == AuthProvider.GOOGLE
        assert profile.external_id == "110248495921238986420"
        assert profile.email == "alice@gmail.com"
        assert profile.email_verified
        assert profile.first_name == "Alice"
        assert profile.avatar_url == "https://lh3.googleusercontent.com/a/alice"

    def test_unverified_email(self):
        profile = normalize_google({"sub": "1", "email": "a@example.com"})

        assert not profile.email_verified

    def test_missing_email_rejected(self):
        with pytest.raises(ValueError):
            normalize_google({"sub": "1"})

    def test_missing_sub_rejected(self):
        with pytest.raises(KeyError):
            normalize_google({"email": "a@example.com"})


class TestNormalizeMicrosoft:
    """Tests for normalize_microsoft()."""

    def test_mail_attribute_is_trusted(self):
        profile = normalize_microsoft(
            {
                "id": "8f4c1a2b",
                "mail": "alice@contoso.com",
                "displayName": "Alice Liddell",
                "givenName": "Alice",
                "surname": "Liddell",
            }
        )

        assert profile.external_id == "8f4c1a2b"
        assert profile.email == "alice@contoso.com"
        assert profile.email_verified
        assert profile.last_name == "Liddell"

    def test_principal_name_fallback_is_not_trusted(self):
        """Sign-in names are used as email but never linked on."""
        profile = normalize_microsoft(
            {"id": "8f4c1a2b", "mail": None, "userPrincipalName": "alice@contoso.com"}
        )

        assert profile.email == "alice@contoso.com"
        assert not profile.email_verified


class TestNormalizeAmazon:
    """Tests for normalize_amazon()."""

    def test_profile(self):
        profile = normalize_amazon(
            {
                "user_id": "amzn1.account.AF2EXAMPLE",
                "name": "Alice Liddell",
                "email": "alice@example.com",
            }
        )

        assert profile.provider == AuthProvider.AMAZON
        assert profile.external_id == "amzn1.account.AF2EXAMPLE"
        assert profile.display_name == "Alice Liddell"
        assert profile.email_verified


class TestNormalizeIdme:
    """Tests for normalize_idme()."""

    def test_attributes_and_affiliation(self):
        profile = normalize_idme(
            {
                "attributes": [
                    {"handle": "fname", "name": "First Name", "value": "Alice"},
                    {"handle": "lname", "name": "Last Name", "value": "Liddell"},
                    {"handle": "email", "name": "Email", "value": "alice@example.com"},
                    {"handle": "uuid", "name": "Unique Identifier", "value": "a1b2c3"},
                ],
                "status": [
                    {"group": "student", "verified": False},
                    {"group": "military", "verified": True},
                ],
            }
        )

        assert profile.provider == AuthProvider.IDME
        assert profile.external_id == "a1b2c3"
        assert profile.display_name == "Alice Liddell"
        assert profile.affiliation == "military"

    def test_no_verified_group(self):
        profile = normalize_idme(
            {
                "attributes": [
                    {"handle": "email", "value": "alice@example.com"},
                    {"handle": "uuid", "value": "a1b2c3"},
                ],
            }
        )

        assert profile.affiliation is None
        assert profile.display_name is None


class TestBuildOAuthClients:
    """Tests for build_oauth_clients()."""

    def test_only_configured_providers_enabled(self):
        settings = OAuthSettings(
            google=OAuthClientSettings(
                client_id="id",
                client_secret="secret",
                callback_url="http://localhost:8000/api/auth/google/callback",
            ),
            amazon=OAuthClientSettings(client_id="id-only"),
        )

        clients = build_oauth_clients(settings)

        assert list(clients) == [AuthProvider.GOOGLE]

    def test_callback_urls_derived_from_host(self):
        settings = Settings(
            host="localhost",
            port=8000,
            oauth=OAuthSettings(
                idme=OAuthClientSettings(client_id="id", client_secret="secret")
            ),
        )

        clients = build_oauth_clients(settings.oauth)

        assert (
            clients[AuthProvider.IDME].redirect_uri
            == "http://localhost:8000/api/auth/idme/callback"
        )

    def test_missing_callback_url(self):
        settings = OAuthSettings(
            google=OAuthClientSettings(client_id="id", client_secret="secret")
        )

        with pytest.raises(ConfigurationError):
            build_oauth_clients(settings)

"""User aggregate root.

One record per human. A user signs in with a local password, with any of
the supported OAuth providers, or both; each provider identity occupies
its own slot on the record.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from credo.domain.model.common import DomainModel
from credo.domain.value import AuthProvider, Email, UserId

# Column/attribute holding each provider's external id
PROVIDER_ID_FIELDS: dict[AuthProvider, str] = {
    AuthProvider.GOOGLE: "google_id",
    AuthProvider.MICROSOFT: "microsoft_id",
    AuthProvider.AMAZON: "amazon_id",
    AuthProvider.IDME: "idme_id",
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(DomainModel):
    """User aggregate root."""

    id: UserId
    email: Email
    password_hash: Optional[str] = None  # Local-credential users only
    is_verified: bool = False

    # Open verification window (both set or both None)
    verification_code: Optional[str] = None
    verification_expires: Optional[datetime] = None

    # One slot per provider
    google_id: Optional[str] = None
    microsoft_id: Optional[str] = None
    amazon_id: Optional[str] = None
    idme_id: Optional[str] = None

    # Profile, filled from providers when blank
    display_name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar_url: Optional[str] = None
    idme_affiliation: Optional[str] = None

    created_at: datetime = Field(default_factory=utcnow)
    last_login: Optional[datetime] = None

    def external_id(self, provider: AuthProvider) -> Optional[str]:
        """Return the linked external id for a provider, if any."""
        return getattr(self, PROVIDER_ID_FIELDS[provider])

    def with_external_id(self, provider: AuthProvider, external_id: str) -> "User":
        """Return a copy with the provider slot set.

        Raises:
            ValueError: If the slot already holds a different id
        """
        current = self.external_id(provider)
        if current is not None and current != external_id:
            raise ValueError(
                f"User {self.id} is already linked to a different {provider.value} identity"
            )
        return self.model_copy(update={PROVIDER_ID_FIELDS[provider]: external_id})

    @property
    def has_password(self) -> bool:
        return self.password_hash is not None

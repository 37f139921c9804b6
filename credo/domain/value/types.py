"""Domain value objects.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules.
"""

from enum import Enum

from pydantic import field_validator, validate_email

from credo.domain.value.common import RootValueObject, ValueObject


class AuthProvider(str, Enum):
    """Supported third-party authentication providers.

    Local (password) authentication is not a provider.
    """

    GOOGLE = "google"
    MICROSOFT = "microsoft"
    AMAZON = "amazon"
    IDME = "idme"


class AuthAction(str, Enum):
    """Action recorded in the authentication audit log."""

    REGISTER = "register"
    LOGIN = "login"
    OAUTH_LOGIN = "oauth-login"
    VERIFY = "verify"
    LOGOUT = "logout"
    RESEND_CODE = "resend-code"


class AuthStatus(str, Enum):
    """Outcome recorded in the authentication audit log."""

    SUCCESS = "success"
    VALIDATION_FAILED = "validation_failed"
    EMAIL_EXISTS = "email_exists"
    INVALID_CREDENTIALS = "invalid_credentials"
    NOT_VERIFIED = "not_verified"
    USER_NOT_FOUND = "user_not_found"
    INVALID_CODE = "invalid_code"
    CODE_EXPIRED = "code_expired"
    ALREADY_VERIFIED = "already_verified"
    PROVIDER_ERROR = "provider_error"
    ERROR = "error"


class Email(RootValueObject[str]):
    """Email address, normalized to stripped lower case.

    Checked by email-validator, the same rule ``EmailStr`` applies to the
    login and verification forms, so any address that registers can also
    verify and sign in. Two spellings of the same address compare equal
    after normalization, which is what the uniqueness rule on users is
    enforced against.
    """

    @field_validator("root")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Validate, then lower-case the address."""
        v = v.strip()
        if len(v) > 255:
            raise ValueError("Invalid email address")
        _, address = validate_email(v)
        return address.lower()


class RequestContext(ValueObject):
    """Client details attached to every audit record."""

    ip_address: str | None = None
    user_agent: str | None = None


class ExternalProfile(ValueObject):
    """Normalized profile yielded by any OAuth provider.

    Built by the provider adapters after the OAuth handshake, before
    identity resolution.
    """

    provider: AuthProvider
    external_id: str  # Permanent id on the provider (Google "sub", etc.)
    email: str
    email_verified: bool = True  # Whether the provider vouches for the address
    display_name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    avatar_url: str | None = None
    affiliation: str | None = None  # ID.me group affiliation

    @field_validator("external_id")
    @classmethod
    def validate_external_id(cls, v: str) -> str:
        """External id must be non-empty."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("External id must be 1-255 characters")
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Normalize the email the same way local addresses are."""
        return Email(v).root

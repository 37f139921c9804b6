"""Base use case and audit helpers shared by the auth use cases."""

from abc import ABC, abstractmethod
from typing import Any

import pydantic

from credo.adapter.error import AdapterError, MailDeliveryError, ProviderError
from credo.domain.error import (
    AlreadyExistsError,
    AlreadyVerifiedError,
    CodeExpiredError,
    DependencyFailureError,
    DomainError,
    InvalidCodeError,
    InvalidCredentialsError,
    NotFoundError,
    NotVerifiedError,
    ValidationError,
)
from credo.domain.value import AuthStatus, Email

# Audit status for each failure, first match wins
_ERROR_STATUSES: list[tuple[type[Exception], AuthStatus]] = [
    (ValidationError, AuthStatus.VALIDATION_FAILED),
    (AlreadyExistsError, AuthStatus.EMAIL_EXISTS),
    (InvalidCredentialsError, AuthStatus.INVALID_CREDENTIALS),
    (NotVerifiedError, AuthStatus.NOT_VERIFIED),
    (NotFoundError, AuthStatus.USER_NOT_FOUND),
    (InvalidCodeError, AuthStatus.INVALID_CODE),
    (CodeExpiredError, AuthStatus.CODE_EXPIRED),
    (AlreadyVerifiedError, AuthStatus.ALREADY_VERIFIED),
    (ProviderError, AuthStatus.PROVIDER_ERROR),
]


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


def audit_status(error: Exception) -> AuthStatus:
    """Map a failure to the status recorded in the audit log."""
    for error_type, status in _ERROR_STATUSES:
        if isinstance(error, error_type):
            return status
    return AuthStatus.ERROR


def as_domain_error(error: AdapterError) -> DependencyFailureError:
    """Surface an adapter failure to the interface layer."""
    if isinstance(error, MailDeliveryError):
        return DependencyFailureError("Mail delivery", str(error))
    if isinstance(error, ProviderError):
        return DependencyFailureError("OAuth provider", str(error))
    return DependencyFailureError("External service", str(error))


def parse_email(raw: str) -> Email:
    """Normalize an email address.

    Raises:
        ValidationError: If the address is malformed
    """
    try:
        return Email(raw)
    except pydantic.ValidationError as e:
        raise ValidationError("Invalid email address") from e


def user_id_of(error: DomainError | AdapterError):
    """User the failure can be attributed to, if known."""
    return getattr(error, "user_id", None)

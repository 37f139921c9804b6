"""Domain value objects."""

from credo.domain.value.identifiers import AuthEventId, SessionId, UserId
from credo.domain.value.types import (
    AuthAction,
    AuthProvider,
    AuthStatus,
    Email,
    ExternalProfile,
    RequestContext,
)

__all__ = [
    # Identifiers
    "UserId",
    "AuthEventId",
    "SessionId",
    # Types
    "AuthAction",
    "AuthProvider",
    "AuthStatus",
    "Email",
    "ExternalProfile",
    "RequestContext",
]

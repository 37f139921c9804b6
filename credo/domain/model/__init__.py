"""Domain model entities."""

from credo.domain.model.auth_event import AuthEvent
from credo.domain.model.session import Session
from credo.domain.model.user import PROVIDER_ID_FIELDS, User

__all__ = [
    "AuthEvent",
    "PROVIDER_ID_FIELDS",
    "Session",
    "User",
]

"""Repository interfaces.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from credo.domain.repository.auth_event import AuthEventRepository
from credo.domain.repository.session import SessionRepository
from credo.domain.repository.user import UserRepository

__all__ = [
    "AuthEventRepository",
    "SessionRepository",
    "UserRepository",
]

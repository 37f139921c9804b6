"""SQL repository implementations."""

from credo.persistence.repository.auth_event import SqlAuthEventRepository
from credo.persistence.repository.session import SqlSessionRepository
from credo.persistence.repository.user import SqlUserRepository

__all__ = [
    "SqlAuthEventRepository",
    "SqlSessionRepository",
    "SqlUserRepository",
]

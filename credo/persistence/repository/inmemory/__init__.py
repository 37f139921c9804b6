"""In-memory repository implementations for testing."""

from .auth_event import InMemoryAuthEventRepository
from .session import InMemorySessionRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryAuthEventRepository",
    "InMemorySessionRepository",
    "InMemoryUserRepository",
]

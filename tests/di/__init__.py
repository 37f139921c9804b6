"""Mock providers for testing."""

from .mail import MockMailProvider
from .oauth import MockOAuthProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockMailProvider",
    "MockOAuthProvider",
    "MockPersistenceProvider",
    "build_test_container",
]

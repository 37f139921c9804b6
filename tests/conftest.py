"""Test configuration and fixtures."""

import os
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

# Must be set before Settings is first instantiated
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("AUTH__BCRYPT_ROUNDS", "4")  # bcrypt minimum, keeps tests fast

from credo.config import AuthSettings  # noqa: E402
from credo.domain.model import User  # noqa: E402
from credo.domain.value import Email, UserId  # noqa: E402
from credo.util.password import hash_password  # noqa: E402

TEST_PASSWORD = "correct horse battery"


class FrozenClock:
    """Controllable clock for services that take a ``clock`` callable."""

    def __init__(self, now: datetime | None = None) -> None:
        self.now = now or datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def auth_settings() -> AuthSettings:
    """Auth settings with the cheapest bcrypt cost."""
    return AuthSettings(bcrypt_rounds=4)


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


def make_user(
    email: str = "alice@example.com",
    password: str | None = TEST_PASSWORD,
    is_verified: bool = True,
    **fields,
) -> User:
    """Helper to build a user; hashes ``password`` with the minimum cost."""
    return User(
        id=UserId(uuid4()),
        email=Email(email),
        password_hash=(
            hash_password(password, AuthSettings(bcrypt_rounds=4)) if password else None
        ),
        is_verified=is_verified,
        **fields,
    )

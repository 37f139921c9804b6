"""In-memory user repository for testing."""

from typing import Optional

from credo.domain.error import AlreadyExistsError
from credo.domain.model.user import PROVIDER_ID_FIELDS, User
from credo.domain.repository.user import UserRepository
from credo.domain.value import AuthProvider, Email, UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing.

    Enforces the same uniqueness rules as the SQL schema.
    """

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_email(self, email: Email) -> Optional[User]:
        """Find a user by their email."""
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def find_by_provider_identity(
        self, provider: AuthProvider, external_id: str
    ) -> Optional[User]:
        """Find a user by their external provider identity."""
        for user in self._users.values():
            if user.external_id(provider) == external_id:
                return user
        return None

    async def find_by_provider_identity_or_email(
        self, provider: AuthProvider, external_id: str, email: Email
    ) -> Optional[User]:
        """Find a user by external identity, falling back to email."""
        user = await self.find_by_provider_identity(provider, external_id)
        if user:
            return user
        return await self.find_by_email(email)

    async def create(self, user: User) -> User:
        """Insert a new user."""
        for existing in self._users.values():
            if existing.id == user.id or existing.email == user.email:
                raise AlreadyExistsError("User", user.email.root)
            for provider in PROVIDER_ID_FIELDS:
                external_id = user.external_id(provider)
                if external_id and existing.external_id(provider) == external_id:
                    raise AlreadyExistsError(f"{provider.value} identity", external_id)
        self._users[user.id] = user
        return user

    async def save(self, user: User) -> User:
        """Update an existing user."""
        self._users[user.id] = user
        return user

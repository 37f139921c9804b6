"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from credo.domain.model.user import User
from credo.domain.value import AuthProvider, Email, UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: Email) -> Optional[User]:
        """Find a user by their (normalized) email.

        Args:
            email: The user's email address

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_provider_identity(
        self, provider: AuthProvider, external_id: str
    ) -> Optional[User]:
        """Find a user by their external provider identity.

        Args:
            provider: The authentication provider
            external_id: The user's ID on that provider

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_provider_identity_or_email(
        self, provider: AuthProvider, external_id: str, email: Email
    ) -> Optional[User]:
        """Find a user by external identity, falling back to email.

        When two different users match (one by id, one by email), the
        external id match wins.

        Args:
            provider: The authentication provider
            external_id: The user's ID on that provider
            email: Email reported by the provider

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Insert a new user.

        Args:
            user: The user to insert

        Returns:
            The inserted user

        Raises:
            AlreadyExistsError: If the email or an external id is taken
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Update an existing user.

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass

"""Auth event repository interface."""

from abc import ABC, abstractmethod

from credo.domain.model.auth_event import AuthEvent
from credo.domain.value import UserId


class AuthEventRepository(ABC):
    """Append-only store for authentication audit events."""

    @abstractmethod
    async def add(self, event: AuthEvent) -> AuthEvent:
        """Append an event.

        Args:
            event: Event to store

        Returns:
            The stored event
        """
        pass

    @abstractmethod
    async def find_all_by_user_id(self, user_id: UserId) -> list[AuthEvent]:
        """Get a user's events, oldest first.

        Args:
            user_id: The user's unique identifier

        Returns:
            List of events (may be empty)
        """
        pass

"""In-memory auth event repository for testing."""

from credo.domain.model.auth_event import AuthEvent
from credo.domain.repository.auth_event import AuthEventRepository
from credo.domain.value import UserId


class InMemoryAuthEventRepository(AuthEventRepository):
    """In-memory implementation of AuthEventRepository for testing."""

    def __init__(self) -> None:
        self.events: list[AuthEvent] = []

    async def add(self, event: AuthEvent) -> AuthEvent:
        """Append an event."""
        self.events.append(event)
        return event

    async def find_all_by_user_id(self, user_id: UserId) -> list[AuthEvent]:
        """Get a user's events, oldest first."""
        return sorted(
            (e for e in self.events if e.user_id == user_id),
            key=lambda e: e.timestamp,
        )

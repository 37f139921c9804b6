"""In-memory session repository for testing."""

from datetime import datetime
from typing import Optional

from credo.domain.model.session import Session
from credo.domain.repository.session import SessionRepository
from credo.domain.value import SessionId


class InMemorySessionRepository(SessionRepository):
    """In-memory implementation of SessionRepository for testing."""

    def __init__(self) -> None:
        self._sessions: dict[SessionId, Session] = {}

    async def find_by_id(self, session_id: SessionId) -> Optional[Session]:
        """Find a session by its handle."""
        return self._sessions.get(session_id)

    async def save(self, session: Session) -> Session:
        """Store a new session."""
        self._sessions[session.id] = session
        return session

    async def delete(self, session_id: SessionId) -> None:
        """Delete a session; unknown handles are ignored."""
        self._sessions.pop(session_id, None)

    async def delete_expired(self, now: datetime) -> int:
        """Delete every session expired at ``now``."""
        expired = [s.id for s in self._sessions.values() if s.is_expired(now)]
        for session_id in expired:
            del self._sessions[session_id]
        return len(expired)

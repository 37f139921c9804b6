"""Session repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from credo.domain.model.session import Session
from credo.domain.value import SessionId


class SessionRepository(ABC):
    """Server-side session store."""

    @abstractmethod
    async def find_by_id(self, session_id: SessionId) -> Optional[Session]:
        """Find a session by its handle.

        Args:
            session_id: Opaque session handle

        Returns:
            The session if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, session: Session) -> Session:
        """Store a new session.

        Args:
            session: Session to store

        Returns:
            The stored session
        """
        pass

    @abstractmethod
    async def delete(self, session_id: SessionId) -> None:
        """Delete a session. Deleting an unknown handle is not an error.

        Args:
            session_id: Opaque session handle
        """
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Delete every session expired at ``now``.

        Args:
            now: Reference time

        Returns:
            Number of sessions removed
        """
        pass

"""Session domain service.

A session is either anonymous (no handle, or a handle that resolves to
nothing) or authenticated as one user id.
"""

import secrets
from datetime import datetime, timedelta
from typing import Callable

import logfire

from credo.config import AuthSettings
from credo.domain.model.session import Session
from credo.domain.model.user import User, utcnow
from credo.domain.repository import SessionRepository, UserRepository
from credo.domain.value import SessionId, UserId
from credo.domain.value.common import ValueObject

from .base import Service


class UserView(ValueObject):
    """What a session exposes about its user. No secrets."""

    id: UserId
    email: str
    display_name: str | None = None
    is_verified: bool


class SessionService(Service):
    """Binds opaque session handles to user ids."""

    def __init__(
        self,
        session_repository: SessionRepository,
        user_repository: UserRepository,
        auth_settings: AuthSettings,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """Initialize session service.

        Args:
            session_repository: Session store
            user_repository: User repository, to expand a session's user id
            auth_settings: Authentication settings (session lifetime)
            clock: Source of the current time
        """
        self.session_repository = session_repository
        self.user_repository = user_repository
        self.auth_settings = auth_settings
        self.clock = clock

    @property
    def session_ttl(self) -> timedelta:
        return timedelta(hours=self.auth_settings.session_ttl_hours)

    async def login(self, user: User) -> SessionId:
        """Open a session for an authenticated user.

        Args:
            user: User returned by identity resolution

        Returns:
            Opaque handle to give the client
        """
        now = self.clock()
        session = Session(
            id=SessionId(secrets.token_urlsafe(32)),
            user_id=user.id,
            created_at=now,
            expires_at=now + self.session_ttl,
        )
        saved = await self.session_repository.save(session)
        logfire.info("Session opened", user_id=str(user.id))
        return saved.id

    async def current_user(self, session_id: str | None) -> UserView | None:
        """Resolve a handle to its user.

        Args:
            session_id: Handle from the client, if any

        Returns:
            The user view, or None for an anonymous session
        """
        if not session_id:
            return None

        session = await self.session_repository.find_by_id(SessionId(session_id))
        if not session:
            return None

        if session.is_expired(self.clock()):
            logfire.info("Session expired", user_id=str(session.user_id))
            await self.session_repository.delete(session.id)
            return None

        user = await self.user_repository.find_by_id(session.user_id)
        if not user:
            # Orphaned session
            await self.session_repository.delete(session.id)
            return None

        return UserView(
            id=user.id,
            email=user.email.root,
            display_name=user.display_name,
            is_verified=user.is_verified,
        )

    async def logout(self, session_id: str | None) -> UserId | None:
        """End a session. Ending an anonymous session is a no-op.

        Args:
            session_id: Handle from the client, if any

        Returns:
            The user id the session belonged to, if it existed
        """
        if not session_id:
            return None

        session = await self.session_repository.find_by_id(SessionId(session_id))
        await self.session_repository.delete(SessionId(session_id))
        if session:
            logfire.info("Session closed", user_id=str(session.user_id))
            return session.user_id
        return None

    async def purge_expired(self) -> int:
        """Delete expired sessions.

        Returns:
            Number of sessions removed
        """
        with logfire.span("session_service.purge_expired"):
            removed = await self.session_repository.delete_expired(self.clock())
            logfire.info("Expired sessions purged", count=removed)
            return removed

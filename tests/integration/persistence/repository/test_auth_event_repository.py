"""Integration tests for SqlAuthEventRepository."""

from uuid import uuid4

import pytest

from credo.domain.model import AuthEvent
from credo.domain.value import AuthAction, AuthEventId, AuthStatus, UserId
from credo.persistence.repository import SqlAuthEventRepository


def make_event(user_id, action: AuthAction, status: AuthStatus) -> AuthEvent:
    return AuthEvent(
        id=AuthEventId(uuid4()),
        user_id=user_id,
        action=action,
        status=status,
        ip_address="192.0.2.1",
        user_agent="pytest",
    )


class TestSqlAuthEventRepository:
    """Integration tests for SqlAuthEventRepository."""

    @pytest.mark.asyncio
    async def test_events_written_on_flush(self, session_factory):
        """Events are buffered until flush, then stored in order."""
        # Arrange
        repo = SqlAuthEventRepository(session_factory)
        user_id = UserId(uuid4())
        await repo.add(make_event(user_id, AuthAction.REGISTER, AuthStatus.SUCCESS))
        await repo.add(make_event(user_id, AuthAction.LOGIN, AuthStatus.NOT_VERIFIED))
        await repo.add(make_event(None, AuthAction.LOGIN, AuthStatus.USER_NOT_FOUND))
        assert await repo.find_all_by_user_id(user_id) == []

        # Act
        await repo.flush()

        # Assert
        events = await repo.find_all_by_user_id(user_id)
        assert [(e.action, e.status) for e in events] == [
            (AuthAction.REGISTER, AuthStatus.SUCCESS),
            (AuthAction.LOGIN, AuthStatus.NOT_VERIFIED),
        ]
        assert events[0].ip_address == "192.0.2.1"

    @pytest.mark.asyncio
    async def test_flush_twice_writes_once(self, session_factory):
        # Arrange
        repo = SqlAuthEventRepository(session_factory)
        user_id = UserId(uuid4())
        await repo.add(make_event(user_id, AuthAction.LOGOUT, AuthStatus.SUCCESS))

        # Act
        await repo.flush()
        await repo.flush()

        # Assert
        assert len(await repo.find_all_by_user_id(user_id)) == 1

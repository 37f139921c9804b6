"""SQL implementation of AuthEvent repository."""

import logfire
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from credo.domain.model import AuthEvent
from credo.domain.repository import AuthEventRepository
from credo.domain.value import UserId
from credo.persistence.mappers import auth_event_to_dict, row_to_auth_event
from credo.persistence.tables import auth_logs_table


class SqlAuthEventRepository(AuthEventRepository):
    """SQLAlchemy Core implementation of AuthEventRepository.

    Unlike the other repositories this one owns its sessions. Events added
    during a request are held until ``flush``, which the DI container calls
    after the request's own transaction has committed or rolled back. Failure
    events therefore survive a rollback, and SQLite never sees two writers.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize repository with a session factory.

        Args:
            session_factory: Factory for independent sessions
        """
        self.session_factory = session_factory
        self._pending: list[AuthEvent] = []

    async def add(self, event: AuthEvent) -> AuthEvent:
        """Queue an event for the next flush."""
        self._pending.append(event)
        return event

    async def flush(self) -> None:
        """Write queued events in a transaction of their own.

        A failed write is logged and the events are dropped.
        """
        if not self._pending:
            return

        events, self._pending = self._pending, []
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    await session.execute(
                        auth_logs_table.insert(),
                        [auth_event_to_dict(event) for event in events],
                    )
        except Exception as e:
            logfire.error(
                "Failed to write auth events", count=len(events), error=str(e)
            )

    async def find_all_by_user_id(self, user_id: UserId) -> list[AuthEvent]:
        """Get a user's stored events, oldest first."""
        stmt = (
            select(auth_logs_table)
            .where(auth_logs_table.c.user_id == user_id)
            .order_by(auth_logs_table.c.timestamp)
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return [row_to_auth_event(dict(row)) for row in result.mappings().all()]

"""SQL implementation of Session repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from credo.domain.model import Session
from credo.domain.repository import SessionRepository
from credo.domain.value import SessionId
from credo.persistence.mappers import row_to_session, session_to_dict
from credo.persistence.tables import sessions_table


class SqlSessionRepository(SessionRepository):
    """SQLAlchemy Core implementation of SessionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, session_id: SessionId) -> Optional[Session]:
        """Find a session by its handle."""
        stmt = select(sessions_table).where(sessions_table.c.id == session_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_session(dict(row)) if row else None

    async def save(self, session: Session) -> Session:
        """Store a new session."""
        stmt = sessions_table.insert().values(**session_to_dict(session))
        await self.session.execute(stmt)
        await self.session.flush()
        return session

    async def delete(self, session_id: SessionId) -> None:
        """Delete a session; unknown handles are ignored."""
        stmt = delete(sessions_table).where(sessions_table.c.id == session_id)
        await self.session.execute(stmt)
        await self.session.flush()

    async def delete_expired(self, now: datetime) -> int:
        """Delete every session expired at ``now``."""
        stmt = delete(sessions_table).where(sessions_table.c.expires_at <= now)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0

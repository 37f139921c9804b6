"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from credo.config import Settings
from credo.domain.repository import (
    AuthEventRepository,
    SessionRepository,
    UserRepository,
)
from credo.persistence.database import create_engine, create_session_factory
from credo.persistence.repository import (
    SqlAuthEventRepository,
    SqlSessionRepository,
    SqlUserRepository,
)
from credo.util.di.base import ProviderBase
from credo.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using SQLAlchemy."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed with the container."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_auth_event_repository(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AuthEventRepository]:
        """Provide AuthEvent repository, flushed when the request ends."""
        repository = SqlAuthEventRepository(session_factory)
        try:
            yield repository
        finally:
            await repository.flush()

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        auth_event_repository: AuthEventRepository,
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is automatically committed at the end of the request
        if no exception occurred, or rolled back if an exception was raised.
        It depends on the audit repository so that the repository is
        finalized, and its events written, after this session ends.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return SqlUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_session_repository(self, session: AsyncSession) -> SessionRepository:
        """Provide Session repository."""
        return SqlSessionRepository(session)


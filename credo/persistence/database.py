"""Engine and session factory.

SQLite (aiosqlite) is the default store; a ``postgresql+asyncpg://`` URL
switches to PostgreSQL.
"""

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from credo.config import Settings


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE on sessions.user_id without this
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(settings: Settings) -> AsyncEngine:
    """Build the engine for ``settings.database_url``.

    Pool sizing applies to PostgreSQL only.
    """
    url = settings.database_url
    if url.startswith("sqlite"):
        engine = create_async_engine(url, echo=settings.debug)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_async_engine(
        url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Sessions that keep loaded rows usable after commit.

    One session per request; the DI provider commits or rolls it back.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

"""Integration test configuration: a fresh SQLite database per test."""

import pytest
import pytest_asyncio
from sqlalchemy import create_engine as create_sync_engine

from credo.config import DatabaseSettings, Settings
from credo.persistence.database import create_engine, create_session_factory
from credo.persistence.tables import metadata


@pytest.fixture(autouse=True)
def database_url(tmp_path, monkeypatch) -> str:
    """Point Settings at an empty database with the current schema."""
    path = tmp_path / "credo-test.db"
    engine = create_sync_engine(f"sqlite:///{path}")
    metadata.create_all(engine)
    engine.dispose()

    url = f"sqlite+aiosqlite:///{path}"
    monkeypatch.setenv("DATABASE__URL", url)
    return url


@pytest_asyncio.fixture
async def session_factory(database_url):
    """Session factory bound to the test database."""
    engine = create_engine(Settings(database=DatabaseSettings(url=database_url)))
    yield create_session_factory(engine)
    await engine.dispose()

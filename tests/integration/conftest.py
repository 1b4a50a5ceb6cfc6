"""Fixtures for persistence integration tests.

SQLite tests run against a real database file so that every unit of work
gets its own connection. PostgreSQL tests run only when
REPERTORIUM_TEST_PG_URL points at a scratch database.
"""

import os
from datetime import date
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from repertorium.config import Config, DatabaseConfig, NumberingConfig
from repertorium.domain.register.model.entry import NewRegisterEntry
from repertorium.domain.register.service.numbering import NumberingPolicy
from repertorium.domain.register.service.projector import IndexProjector
from repertorium.domain.register.service.reader import RegisterReader
from repertorium.domain.register.service.stats_cache import StatsCache
from repertorium.domain.register.service.writer import RegisterWriter, RetryPolicy
from repertorium.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
)
from repertorium.infrastructure.persistence.repository.read_store import (
    SQLAlchemyRegisterReadStore,
)
from repertorium.infrastructure.persistence.tables import metadata
from repertorium.infrastructure.persistence.unit_of_work import (
    SQLAlchemyRegisterUnitOfWork,
)

# Generous budget: 100 writers queue on one SQLite write lock
TEST_RETRY = RetryPolicy(max_attempts=50, backoff_base=0.005, backoff_max=0.05)


def _config(url: str) -> Config:
    return Config(
        database=DatabaseConfig(url=url, busy_timeout=5.0, auto_migrate=False),
        numbering=NumberingConfig(stats_cache_ttl=0),
    )


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "register.db"


@pytest.fixture
def sqlite_config(db_path: Path) -> Config:
    return _config(f"sqlite+aiosqlite:///{db_path}")


@pytest_asyncio.fixture
async def engine(sqlite_config: Config):
    engine = create_db_engine(sqlite_config)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(engine)


@pytest.fixture
def uow_factory(session_factory: async_sessionmaker[AsyncSession]):
    return lambda: SQLAlchemyRegisterUnitOfWork(session_factory)


@pytest.fixture
def writer(uow_factory) -> RegisterWriter:
    return RegisterWriter(
        uow_factory=uow_factory,
        numbering=NumberingPolicy(),
        projector=IndexProjector(),
        retry=TEST_RETRY,
    )


@pytest.fixture
def reader(session_factory: async_sessionmaker[AsyncSession]) -> RegisterReader:
    return RegisterReader(
        store=SQLAlchemyRegisterReadStore(session_factory),
        stats_cache=StatsCache(ttl_seconds=0),
    )


def make_entry(
    executed_at: date = date(2025, 3, 10),
    names: list[str] | None = None,
    nature: str = "Akta Jual Beli",
    **extra,
) -> NewRegisterEntry:
    return NewRegisterEntry(
        executed_at=executed_at,
        nature_of_deed=nature,
        appearer_names=names if names is not None else ["Budi Santoso"],
        created_by_actor_id="notary-1",
        **extra,
    )


@pytest.fixture
def entry_factory():
    return make_entry


# =============================================================================
# PostgreSQL
# =============================================================================


def _get_pg_url() -> str:
    url = os.environ.get("REPERTORIUM_TEST_PG_URL", "")
    if "postgresql" not in url:
        pytest.skip("REPERTORIUM_TEST_PG_URL not set to PostgreSQL")
    return url


@pytest_asyncio.fixture
async def pg_engine():
    """Per-test engine with freshly created tables, dropped afterwards."""
    engine = create_db_engine(_config(_get_pg_url()))
    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
        await conn.run_sync(metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def pg_writer(pg_engine: AsyncEngine) -> RegisterWriter:
    session_factory = create_session_factory(pg_engine)
    return RegisterWriter(
        uow_factory=lambda: SQLAlchemyRegisterUnitOfWork(session_factory),
        numbering=NumberingPolicy(),
        projector=IndexProjector(),
        retry=TEST_RETRY,
    )


@pytest.fixture
def pg_reader(pg_engine: AsyncEngine) -> RegisterReader:
    return RegisterReader(
        store=SQLAlchemyRegisterReadStore(create_session_factory(pg_engine)),
        stats_cache=StatsCache(ttl_seconds=0),
    )

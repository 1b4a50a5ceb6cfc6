"""Database engine and session factory creation."""

import os
from pathlib import Path
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool, StaticPool

from repertorium.config import Config


def _expand_sqlite_path(url: str) -> str:
    """Expand ~ in SQLite URLs and ensure parent directory exists."""
    if not url.startswith("sqlite") or ":memory:" in url:
        return url

    # Extract path from URL (sqlite+aiosqlite:///path or sqlite:///path)
    prefix_end = url.index("///") + 3
    prefix = url[:prefix_end]
    path = url[prefix_end:]

    # Expand ~ and make absolute
    expanded = os.path.expanduser(path)
    abs_path = os.path.abspath(expanded)

    # Ensure parent directory exists
    parent = Path(abs_path).parent
    parent.mkdir(parents=True, exist_ok=True)

    return f"{prefix}{abs_path}"


def _enable_sqlite_pragmas(engine: AsyncEngine, wal: bool) -> None:
    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        if wal:
            # Readers see the last commit and never block the writer
            cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()


def create_db_engine(config: Config) -> AsyncEngine:
    """Create async database engine.

    Handles SQLite and PostgreSQL with appropriate settings.
    """
    url = _expand_sqlite_path(config.database.url)
    is_sqlite = url.startswith("sqlite")

    if is_sqlite:
        in_memory = ":memory:" in url or "///" not in url
        engine_kwargs: dict[str, Any] = {
            "echo": config.database.echo,
            "connect_args": {
                "check_same_thread": False,
                "timeout": config.database.busy_timeout,
            },
        }
        if in_memory:
            # One shared connection, otherwise every session sees an empty database
            engine_kwargs["poolclass"] = StaticPool
        else:
            # One connection per unit of work so transactions stay isolated
            engine_kwargs["poolclass"] = NullPool
        engine = create_async_engine(url, **engine_kwargs)
        _enable_sqlite_pragmas(engine, wal=not in_memory)
        return engine

    # PostgreSQL settings
    engine_kwargs = {
        "echo": config.database.echo,
        "pool_pre_ping": True,
        "pool_size": 5,
        "max_overflow": 10,
    }
    if url.startswith("postgresql+asyncpg"):
        # Bounded lock waits surface as 55P03 and are retried by the writer
        engine_kwargs["connect_args"] = {
            "server_settings": {"lock_timeout": str(config.database.lock_timeout_ms)},
        }
    return create_async_engine(url, **engine_kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory for dependency injection."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )



"""Counter store backed by the register_counters table."""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from repertorium.domain.register.model.value import ScopeKey
from repertorium.domain.register.port.counter_store import CounterStore
from repertorium.domain.shared.error import ConfigurationError
from repertorium.infrastructure.persistence.tables import (
    YEARLY_MONTH,
    register_counters_table,
)

_KEY_COLUMNS = ["scope_kind", "office_id", "pool", "year", "month"]


def _key_values(key: ScopeKey) -> dict[str, Any]:
    return {
        "scope_kind": str(key.kind),
        "office_id": key.office_id,
        "pool": str(key.pool),
        "year": key.year,
        "month": key.month if key.month is not None else YEARLY_MONTH,
    }


class SQLAlchemyCounterStore(CounterStore):
    """Atomic upsert-and-increment on one counter row.

    ``INSERT .. ON CONFLICT DO UPDATE SET last_issued = last_issued + 1 RETURNING``
    takes the row lock on PostgreSQL and the write lock on SQLite. Both are
    held until the surrounding transaction ends, so a rollback also undoes
    the increment.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _insert(self):
        dialect = self._session.get_bind().dialect.name
        if dialect == "postgresql":
            return pg_insert
        if dialect == "sqlite":
            return sqlite_insert
        raise ConfigurationError(f"Counter allocation is not supported on {dialect}")

    async def allocate_next(self, key: ScopeKey) -> int:
        now = datetime.now(UTC)
        insert = self._insert()
        table = register_counters_table
        stmt = (
            insert(table)
            .values(**_key_values(key), last_issued=1, updated_at=now)
            .on_conflict_do_update(
                index_elements=_KEY_COLUMNS,
                set_={"last_issued": table.c.last_issued + 1, "updated_at": now},
            )
            .returning(table.c.last_issued)
        )
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    async def peek(self, key: ScopeKey) -> int:
        table = register_counters_table
        conditions = [table.c[name] == value for name, value in _key_values(key).items()]
        stmt = select(table.c.last_issued).where(*conditions)
        result = await self._session.execute(stmt)
        value = result.scalar_one_or_none()
        return int(value) if value is not None else 0

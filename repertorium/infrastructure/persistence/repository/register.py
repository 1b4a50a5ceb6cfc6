from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from repertorium.domain.register.model.entry import RegisterEntry
from repertorium.domain.register.model.index import IndexEntry
from repertorium.domain.register.model.value import EntryId
from repertorium.domain.register.port.repository import RegisterRepository
from repertorium.infrastructure.persistence.mappers.register import (
    entry_to_dict,
    index_entry_to_dict,
    row_to_entry,
)
from repertorium.infrastructure.persistence.tables import (
    index_entries_table,
    register_entries_table,
)


class SQLAlchemyRegisterRepository(RegisterRepository):
    """Write side of the register, sharing the unit of work's session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def add(self, entry: RegisterEntry) -> None:
        stmt = insert(register_entries_table).values(**entry_to_dict(entry))
        await self.session.execute(stmt)

    async def add_index_entries(self, rows: list[IndexEntry]) -> None:
        if not rows:
            return
        values = [index_entry_to_dict(row, position) for position, row in enumerate(rows)]
        await self.session.execute(insert(index_entries_table), values)

    async def get(self, entry_id: EntryId) -> RegisterEntry | None:
        # Row lock on PostgreSQL so concurrent amendments serialize; no-op on SQLite
        stmt = (
            select(register_entries_table)
            .where(register_entries_table.c.id == str(entry_id))
            .with_for_update()
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_entry(dict(row)) if row else None

    async def save_amendment(self, entry: RegisterEntry) -> None:
        stmt = (
            update(register_entries_table)
            .where(register_entries_table.c.id == str(entry.id))
            .values(
                notes=entry.notes,
                linked_document_id=entry.linked_document_id,
                updated_at=entry.updated_at,
            )
        )
        await self.session.execute(stmt)

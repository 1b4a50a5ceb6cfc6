"""Read-only queries over committed register and index rows."""

from typing import Any

from sqlalchemy import ColumnElement, Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from repertorium.domain.register.model.entry import RegisterEntry
from repertorium.domain.register.model.index import IndexEntry
from repertorium.domain.register.model.query import (
    IndexFilter,
    IndexSortKey,
    LetterCount,
    RegisterFilter,
    RegisterSortKey,
    RegisterStats,
    SortDirection,
)
from repertorium.domain.register.model.value import EntryId
from repertorium.domain.register.port.read_store import RegisterReadStore
from repertorium.infrastructure.persistence.mappers.register import (
    row_to_entry,
    row_to_index_entry,
)
from repertorium.infrastructure.persistence.tables import (
    index_entries_table,
    register_entries_table,
)

entries = register_entries_table
index = index_entries_table

_TOTAL = "_total"


def _like_pattern(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _ordered(column: ColumnElement[Any], direction: SortDirection) -> ColumnElement[Any]:
    return column.desc() if direction == SortDirection.DESC else column.asc()


def _entry_conditions(flt: RegisterFilter) -> list[ColumnElement[bool]]:
    conditions: list[ColumnElement[bool]] = []
    if flt.office_id is not None:
        conditions.append(entries.c.office_id == flt.office_id)
    if flt.year is not None:
        conditions.append(entries.c.year == flt.year)
    if flt.month is not None:
        conditions.append(entries.c.month == flt.month)
    if flt.is_land_registry_act is not None:
        conditions.append(entries.c.is_land_registry_act == flt.is_land_registry_act)
    if flt.executed_from is not None:
        conditions.append(entries.c.executed_at >= flt.executed_from)
    if flt.executed_to is not None:
        conditions.append(entries.c.executed_at <= flt.executed_to)
    if flt.search:
        pattern = _like_pattern(flt.search)
        name_match = (
            select(index.c.id)
            .where(index.c.register_entry_id == entries.c.id)
            .where(index.c.appearer_name.ilike(pattern, escape="\\"))
            .exists()
        )
        conditions.append(
            or_(
                entries.c.nature_of_deed.ilike(pattern, escape="\\"),
                entries.c.notes.ilike(pattern, escape="\\"),
                name_match,
            )
        )
    return conditions


def _entry_order(flt: RegisterFilter) -> list[ColumnElement[Any]]:
    if flt.sort == RegisterSortKey.YEARLY_SEQ:
        primary = [
            _ordered(entries.c.year, flt.direction),
            _ordered(entries.c.yearly_seq, flt.direction),
        ]
    elif flt.sort == RegisterSortKey.EXECUTED_AT:
        primary = [_ordered(entries.c.executed_at, flt.direction)]
    else:
        primary = [_ordered(entries.c.nature_of_deed, flt.direction)]
    # Stable tie-break so paging never skips or repeats rows
    return [*primary, entries.c.year.asc(), entries.c.yearly_seq.asc(), entries.c.id.asc()]


def _index_conditions(flt: IndexFilter) -> list[ColumnElement[bool]]:
    conditions: list[ColumnElement[bool]] = []
    if flt.office_id is not None:
        conditions.append(index.c.office_id == flt.office_id)
    if flt.year is not None:
        conditions.append(index.c.year == flt.year)
    if flt.month is not None:
        conditions.append(index.c.month == flt.month)
    if flt.first_letter is not None:
        conditions.append(index.c.first_letter == flt.first_letter)
    if flt.executed_from is not None:
        conditions.append(index.c.executed_at >= flt.executed_from)
    if flt.executed_to is not None:
        conditions.append(index.c.executed_at <= flt.executed_to)
    if flt.is_land_registry_act is not None:
        conditions.append(
            index.c.register_entry_id.in_(
                select(entries.c.id).where(
                    entries.c.is_land_registry_act == flt.is_land_registry_act
                )
            )
        )
    if flt.search:
        pattern = _like_pattern(flt.search)
        conditions.append(index.c.appearer_name.ilike(pattern, escape="\\"))
    return conditions


def _index_order(flt: IndexFilter) -> list[ColumnElement[Any]]:
    if flt.sort == IndexSortKey.NAME:
        primary = [
            _ordered(index.c.first_letter, flt.direction),
            _ordered(index.c.appearer_name, flt.direction),
        ]
    elif flt.sort == IndexSortKey.YEARLY_SEQ:
        primary = [
            _ordered(index.c.year, flt.direction),
            _ordered(index.c.yearly_seq, flt.direction),
        ]
    elif flt.sort == IndexSortKey.EXECUTED_AT:
        primary = [_ordered(index.c.executed_at, flt.direction)]
    else:
        primary = [_ordered(index.c.nature_of_deed, flt.direction)]
    return [
        *primary,
        index.c.year.asc(),
        index.c.yearly_seq.asc(),
        index.c.position.asc(),
        index.c.id.asc(),
    ]


async def _page(session: AsyncSession, stmt: Select, offset: int, limit: int) -> tuple[list[dict], int]:
    # Window count: total and items come from the same statement snapshot
    windowed = stmt.add_columns(func.count().over().label(_TOTAL))
    result = await session.execute(windowed.offset(offset).limit(limit))
    rows = [dict(r) for r in result.mappings().all()]
    if rows:
        total = rows[0][_TOTAL]
        for row in rows:
            del row[_TOTAL]
        return rows, total
    if offset == 0:
        return [], 0
    # Past the last row the window has nothing to report
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    return [], (await session.execute(count_stmt)).scalar_one()


class SQLAlchemyRegisterReadStore(RegisterReadStore):
    """Each call runs in its own short-lived session; counters are never read."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def find_entries(self, flt: RegisterFilter) -> tuple[list[RegisterEntry], int]:
        stmt = select(entries).where(*_entry_conditions(flt)).order_by(*_entry_order(flt))
        async with self._session_factory() as session:
            rows, total = await _page(session, stmt, flt.offset, flt.limit)
        return [row_to_entry(r) for r in rows], total

    async def find_index_entries(self, flt: IndexFilter) -> tuple[list[IndexEntry], int]:
        stmt = select(index).where(*_index_conditions(flt)).order_by(*_index_order(flt))
        async with self._session_factory() as session:
            rows, total = await _page(session, stmt, flt.offset, flt.limit)
        return [row_to_index_entry(r) for r in rows], total

    async def get(self, entry_id: EntryId) -> RegisterEntry | None:
        stmt = select(entries).where(entries.c.id == str(entry_id))
        async with self._session_factory() as session:
            row = (await session.execute(stmt)).mappings().first()
        return row_to_entry(dict(row)) if row else None

    async def index_for(self, entry_id: EntryId) -> list[IndexEntry]:
        stmt = (
            select(index)
            .where(index.c.register_entry_id == str(entry_id))
            .order_by(index.c.position.asc())
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [row_to_index_entry(dict(r)) for r in result.mappings().all()]

    async def stats(self, year: int, office_id: str | None = None) -> RegisterStats:
        conditions = [entries.c.year == year]
        if office_id is not None:
            conditions.append(entries.c.office_id == office_id)

        totals = select(
            func.count(),
            func.coalesce(func.max(entries.c.yearly_seq), 0),
        ).where(*conditions)
        per_month = (
            select(entries.c.month, func.count())
            .where(*conditions)
            .group_by(entries.c.month)
            .order_by(entries.c.month)
        )
        async with self._session_factory() as session:
            total, last = (await session.execute(totals)).one()
            months = (await session.execute(per_month)).all()

        return RegisterStats(
            year=year,
            total_for_year=total,
            last_yearly_seq=last,
            per_month_counts={month: count for month, count in months},
        )

    async def letter_counts(
        self,
        year: int,
        month: int | None = None,
        office_id: str | None = None,
    ) -> list[LetterCount]:
        stmt = select(index.c.first_letter, func.count()).where(index.c.year == year)
        if month is not None:
            stmt = stmt.where(index.c.month == month)
        if office_id is not None:
            stmt = stmt.where(index.c.office_id == office_id)
        stmt = stmt.group_by(index.c.first_letter).order_by(index.c.first_letter)

        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [LetterCount(letter=letter, count=count) for letter, count in result.all()]

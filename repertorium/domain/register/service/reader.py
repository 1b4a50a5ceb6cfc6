"""RegisterReader - filtered views and aggregates over committed register data."""

import logging

from repertorium.domain.register.model.entry import RegisterEntry
from repertorium.domain.register.model.index import IndexEntry
from repertorium.domain.register.model.query import (
    MAX_PAGE_SIZE,
    IndexFilter,
    LetterCount,
    Page,
    RegisterFilter,
    RegisterStats,
)
from repertorium.domain.register.model.value import NO_LETTER, EntryId
from repertorium.domain.register.port.read_store import RegisterReadStore
from repertorium.domain.register.service.stats_cache import StatsCache
from repertorium.domain.shared.error import NotFoundError, ValidationError
from repertorium.domain.shared.service import Service

logger = logging.getLogger(__name__)

F = RegisterFilter | IndexFilter


def _check_year(year: int | None) -> None:
    if year is not None and not 1 <= year <= 9999:
        raise ValidationError(f"Invalid year: {year}", field="year")


def _check_month(month: int | None) -> None:
    if month is not None and not 1 <= month <= 12:
        raise ValidationError(f"Invalid month: {month}", field="month")


def _normalize(flt: F) -> F:
    _check_year(flt.year)
    _check_month(flt.month)
    if flt.offset < 0:
        raise ValidationError("Offset cannot be negative", field="offset")
    if not 1 <= flt.limit <= MAX_PAGE_SIZE:
        raise ValidationError(f"Limit must be between 1 and {MAX_PAGE_SIZE}", field="limit")
    if flt.executed_from and flt.executed_to and flt.executed_from > flt.executed_to:
        raise ValidationError("Date range is reversed", field="executed_from")

    update: dict[str, object] = {"search": (flt.search or "").strip() or None}
    if isinstance(flt, IndexFilter) and flt.first_letter is not None:
        letter = flt.first_letter.strip().upper()
        if len(letter) != 1 or not (letter.isalpha() or letter == NO_LETTER):
            raise ValidationError(
                f"Invalid index letter: {flt.first_letter!r}", field="first_letter"
            )
        update["first_letter"] = letter
    return flt.model_copy(update=update)


class RegisterReader(Service):
    """Read-only queries. Results reflect what was committed when the query ran."""

    store: RegisterReadStore
    stats_cache: StatsCache

    async def query(self, flt: RegisterFilter) -> Page[RegisterEntry]:
        flt = _normalize(flt)
        items, total = await self.store.find_entries(flt)
        return Page[RegisterEntry](items=items, total=total, offset=flt.offset, limit=flt.limit)

    async def query_index(self, flt: IndexFilter) -> Page[IndexEntry]:
        flt = _normalize(flt)
        items, total = await self.store.find_index_entries(flt)
        return Page[IndexEntry](items=items, total=total, offset=flt.offset, limit=flt.limit)

    async def get(self, entry_id: EntryId) -> RegisterEntry:
        entry = await self.store.get(entry_id)
        if entry is None:
            raise NotFoundError(f"Register entry not found: {entry_id}")
        return entry

    async def index_for(self, entry_id: EntryId) -> list[IndexEntry]:
        return await self.store.index_for(entry_id)

    async def stats(self, year: int, office_id: str | None = None) -> RegisterStats:
        _check_year(year)
        cached = self.stats_cache.get(year, office_id)
        if cached is not None:
            return cached
        stats = await self.store.stats(year, office_id)
        self.stats_cache.put(stats, office_id)
        logger.debug(
            "Computed stats for %s: total=%d last=%d",
            year,
            stats.total_for_year,
            stats.last_yearly_seq,
        )
        return stats

    async def letter_counts(
        self,
        year: int,
        month: int | None = None,
        office_id: str | None = None,
    ) -> list[LetterCount]:
        _check_year(year)
        _check_month(month)
        return await self.store.letter_counts(year, month, office_id)

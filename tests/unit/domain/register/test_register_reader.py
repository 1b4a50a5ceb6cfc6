"""Unit tests for RegisterReader."""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from repertorium.domain.register.model.query import (
    IndexFilter,
    RegisterFilter,
    RegisterStats,
)
from repertorium.domain.register.model.value import EntryId
from repertorium.domain.register.port.read_store import RegisterReadStore
from repertorium.domain.register.service.reader import RegisterReader
from repertorium.domain.register.service.stats_cache import StatsCache
from repertorium.domain.shared.error import NotFoundError, ValidationError


@pytest.fixture
def mock_store() -> RegisterReadStore:
    store = MagicMock(spec=RegisterReadStore)
    store.find_entries = AsyncMock(return_value=([], 0))
    store.find_index_entries = AsyncMock(return_value=([], 0))
    store.get = AsyncMock(return_value=None)
    store.stats = AsyncMock(
        return_value=RegisterStats(
            year=2025, total_for_year=3, last_yearly_seq=3, per_month_counts={3: 3}
        )
    )
    store.letter_counts = AsyncMock(return_value=[])
    return store


@pytest.fixture
def reader(mock_store: RegisterReadStore) -> RegisterReader:
    return RegisterReader(store=mock_store, stats_cache=StatsCache(ttl_seconds=60))


class TestQuery:
    @pytest.mark.asyncio
    async def test_empty_result_is_an_empty_page(self, reader: RegisterReader):
        page = await reader.query(RegisterFilter(year=2025, month=4))

        assert page.items == []
        assert page.total == 0
        assert page.has_more is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("flt", "field"),
        [
            (RegisterFilter(month=13), "month"),
            (RegisterFilter(year=0), "year"),
            (RegisterFilter(limit=0), "limit"),
            (RegisterFilter(limit=501), "limit"),
            (RegisterFilter(offset=-1), "offset"),
        ],
    )
    async def test_rejects_bad_filters(
        self, reader: RegisterReader, mock_store, flt: RegisterFilter, field: str
    ):
        with pytest.raises(ValidationError) as exc_info:
            await reader.query(flt)

        assert exc_info.value.field == field
        mock_store.find_entries.assert_not_called()

    @pytest.mark.asyncio
    async def test_rejects_reversed_date_range(self, reader: RegisterReader):
        with pytest.raises(ValidationError):
            await reader.query(
                RegisterFilter(executed_from=date(2025, 5, 1), executed_to=date(2025, 4, 1))
            )

    @pytest.mark.asyncio
    async def test_blank_search_is_dropped(self, reader: RegisterReader, mock_store):
        await reader.query(RegisterFilter(search="   "))

        flt = mock_store.find_entries.call_args.args[0]
        assert flt.search is None


class TestQueryIndex:
    @pytest.mark.asyncio
    async def test_letter_is_upper_cased(self, reader: RegisterReader, mock_store):
        await reader.query_index(IndexFilter(first_letter="b"))

        flt = mock_store.find_index_entries.call_args.args[0]
        assert flt.first_letter == "B"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("letter", ["ab", "1", ""])
    async def test_rejects_bad_letter(self, reader: RegisterReader, letter: str):
        with pytest.raises(ValidationError) as exc_info:
            await reader.query_index(IndexFilter(first_letter=letter))

        assert exc_info.value.field == "first_letter"

    @pytest.mark.asyncio
    async def test_accepts_no_letter_bucket(self, reader: RegisterReader, mock_store):
        await reader.query_index(IndexFilter(first_letter="#"))

        assert mock_store.find_index_entries.call_args.args[0].first_letter == "#"


class TestGet:
    @pytest.mark.asyncio
    async def test_missing_entry_raises_not_found(self, reader: RegisterReader):
        with pytest.raises(NotFoundError):
            await reader.get(EntryId.generate())


class TestStats:
    @pytest.mark.asyncio
    async def test_stats_are_cached(self, reader: RegisterReader, mock_store):
        first = await reader.stats(2025)
        second = await reader.stats(2025)

        assert first == second
        assert first.months[0].month == 3
        mock_store.stats.assert_awaited_once_with(2025, None)

    @pytest.mark.asyncio
    async def test_disabled_cache_always_hits_store(self, mock_store):
        reader = RegisterReader(store=mock_store, stats_cache=StatsCache(ttl_seconds=0))

        await reader.stats(2025)
        await reader.stats(2025)

        assert mock_store.stats.await_count == 2

    @pytest.mark.asyncio
    async def test_rejects_bad_month_for_letter_counts(self, reader: RegisterReader):
        with pytest.raises(ValidationError):
            await reader.letter_counts(2025, month=0)

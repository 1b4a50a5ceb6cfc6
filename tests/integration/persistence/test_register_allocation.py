"""End-to-end allocation properties against a SQLite database file."""

import asyncio
from datetime import date
from unittest.mock import MagicMock

import pytest

from repertorium.domain.register.model.query import RegisterFilter
from repertorium.domain.register.service.numbering import NumberingPolicy
from repertorium.domain.register.service.projector import IndexProjector
from repertorium.domain.register.service.writer import RegisterWriter, RetryPolicy
from repertorium.domain.shared.error import ValidationError


async def _peek_yearly(uow_factory, year: int) -> int:
    yearly, _ = NumberingPolicy().scope_keys(date(year, 1, 1), False)
    async with uow_factory() as uow:
        return await uow.counters.peek(yearly)


class TestGapless:
    @pytest.mark.asyncio
    async def test_sequential_creations_are_one_to_n(self, writer, reader, entry_factory):
        for day in range(1, 11):
            await writer.create_entry(entry_factory(executed_at=date(2025, 1, day)))

        page = await reader.query(RegisterFilter(year=2025, limit=100))

        assert [e.yearly_seq for e in page.items] == list(range(1, 11))
        assert page.total == 10

    @pytest.mark.asyncio
    async def test_concurrent_creations_get_distinct_numbers(
        self, writer, reader, entry_factory
    ):
        entries = await asyncio.gather(
            *(writer.create_entry(entry_factory(names=[f"Appearer {i}"])) for i in range(100))
        )

        numbers = sorted(e.yearly_seq for e in entries)
        assert numbers == list(range(1, 101))
        assert sorted(e.monthly_seq for e in entries) == list(range(1, 101))

        stats = await reader.stats(2025)
        assert stats.total_for_year == 100
        assert stats.last_yearly_seq == 100


class TestAtomicity:
    @pytest.mark.asyncio
    async def test_failing_projection_leaves_no_trace(
        self, uow_factory, writer, reader, entry_factory
    ):
        await writer.create_entry(entry_factory())
        projector = MagicMock(spec=IndexProjector)
        projector.project.side_effect = RuntimeError("index write failed")
        failing = RegisterWriter(
            uow_factory=uow_factory,
            numbering=NumberingPolicy(),
            projector=projector,
            retry=RetryPolicy(),
        )

        with pytest.raises(RuntimeError):
            await failing.create_entry(entry_factory())

        assert await _peek_yearly(uow_factory, 2025) == 1
        assert (await reader.query(RegisterFilter(year=2025))).total == 1

        entry = await writer.create_entry(entry_factory())
        assert entry.yearly_seq == 2

    @pytest.mark.asyncio
    async def test_rejected_input_consumes_no_number(
        self, uow_factory, writer, entry_factory
    ):
        await writer.create_entry(entry_factory())

        with pytest.raises(ValidationError):
            await writer.create_entry(entry_factory(names=[]))

        assert await _peek_yearly(uow_factory, 2025) == 1
        assert (await writer.create_entry(entry_factory())).yearly_seq == 2


class TestScopeIndependence:
    @pytest.mark.asyncio
    async def test_new_year_starts_at_one(self, uow_factory, writer, entry_factory):
        for day in range(1, 6):
            await writer.create_entry(entry_factory(executed_at=date(2024, 12, day)))

        entry = await writer.create_entry(entry_factory(executed_at=date(2025, 1, 2)))

        assert entry.yearly_seq == 1
        assert await _peek_yearly(uow_factory, 2024) == 5

    @pytest.mark.asyncio
    async def test_backdated_deed_uses_its_own_year(self, writer, entry_factory):
        await writer.create_entry(entry_factory(executed_at=date(2025, 2, 1)))

        late = await writer.create_entry(entry_factory(executed_at=date(2024, 12, 31)))

        assert (late.year, late.yearly_seq) == (2024, 1)

    @pytest.mark.asyncio
    async def test_concurrent_years_are_each_gapless(self, uow_factory, writer, entry_factory):
        dates = [date(2024, 6, 1), date(2025, 6, 1)] * 20

        entries = await asyncio.gather(
            *(writer.create_entry(entry_factory(executed_at=d)) for d in dates)
        )

        for year in (2024, 2025):
            numbers = sorted(e.yearly_seq for e in entries if e.year == year)
            assert numbers == list(range(1, 21))
            assert await _peek_yearly(uow_factory, year) == 20


class TestAmendment:
    @pytest.mark.asyncio
    async def test_amend_keeps_numbers_and_index(self, writer, reader, entry_factory):
        created = await writer.create_entry(entry_factory(names=["Budi", "Citra"]))
        index_before = await reader.index_for(created.id)

        await writer.amend_entry(
            created.id, {"notes": "Minuta disimpan", "linked_document_id": "doc-9"}
        )

        stored = await reader.get(created.id)
        assert stored.notes == "Minuta disimpan"
        assert stored.linked_document_id == "doc-9"
        assert stored.updated_at is not None
        assert (stored.yearly_seq, stored.monthly_seq) == (created.yearly_seq, created.monthly_seq)
        assert await reader.index_for(created.id) == index_before

"""In-memory register fakes for service-level tests."""

from datetime import date
from unittest.mock import AsyncMock

import pytest

from repertorium.domain.register.model.entry import NewRegisterEntry, RegisterEntry
from repertorium.domain.register.model.index import IndexEntry
from repertorium.domain.register.model.value import EntryId, ScopeKey
from repertorium.domain.register.port.counter_store import CounterStore
from repertorium.domain.register.port.repository import RegisterRepository
from repertorium.domain.register.port.unit_of_work import RegisterUnitOfWork
from repertorium.domain.register.service.numbering import NumberingPolicy
from repertorium.domain.register.service.projector import IndexProjector
from repertorium.domain.register.service.stats_cache import StatsCache
from repertorium.domain.register.service.writer import RegisterWriter, RetryPolicy
from repertorium.domain.shared.error import TransientConflictError


class InMemoryRegister:
    """Committed state shared by every fake unit of work."""

    def __init__(self) -> None:
        self.counters: dict[ScopeKey, int] = {}
        self.entries: dict[EntryId, RegisterEntry] = {}
        self.index_rows: list[IndexEntry] = []
        self.pending_conflicts = 0
        self.commits = 0
        self.rollbacks = 0


class FakeCounterStore(CounterStore):
    def __init__(self, db: InMemoryRegister, staged: dict[ScopeKey, int]) -> None:
        self._db = db
        self._staged = staged

    async def allocate_next(self, key: ScopeKey) -> int:
        if self._db.pending_conflicts > 0:
            self._db.pending_conflicts -= 1
            raise TransientConflictError("could not obtain lock on row")
        self._staged[key] = self._staged.get(key, 0) + 1
        return self._staged[key]

    async def peek(self, key: ScopeKey) -> int:
        return self._staged.get(key, 0)


class FakeRegisterRepository(RegisterRepository):
    def __init__(
        self,
        db: InMemoryRegister,
        staged: dict[EntryId, RegisterEntry],
        staged_index: list[IndexEntry],
    ) -> None:
        self._db = db
        self._staged = staged
        self._staged_index = staged_index

    async def add(self, entry: RegisterEntry) -> None:
        self._staged[entry.id] = entry

    async def add_index_entries(self, rows: list[IndexEntry]) -> None:
        self._staged_index.extend(rows)

    async def get(self, entry_id: EntryId) -> RegisterEntry | None:
        entry = self._staged.get(entry_id) or self._db.entries.get(entry_id)
        return entry.model_copy(deep=True) if entry else None

    async def save_amendment(self, entry: RegisterEntry) -> None:
        self._staged[entry.id] = entry


class FakeUnitOfWork(RegisterUnitOfWork):
    def __init__(self, db: InMemoryRegister) -> None:
        self._db = db

    async def begin(self) -> None:
        self._counters = dict(self._db.counters)
        self._entries: dict[EntryId, RegisterEntry] = {}
        self._index: list[IndexEntry] = []
        self.counters = FakeCounterStore(self._db, self._counters)
        self.entries = FakeRegisterRepository(self._db, self._entries, self._index)

    async def commit(self) -> None:
        self._db.counters = self._counters
        self._db.entries.update(self._entries)
        self._db.index_rows.extend(self._index)
        self._db.commits += 1

    async def rollback(self) -> None:
        self._db.rollbacks += 1


@pytest.fixture
def register_db() -> InMemoryRegister:
    return InMemoryRegister()


@pytest.fixture
def stats_cache() -> StatsCache:
    return StatsCache(ttl_seconds=60)


@pytest.fixture
def sleep() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def fake_uow_factory(register_db: InMemoryRegister):
    return lambda: FakeUnitOfWork(register_db)


@pytest.fixture
def writer(fake_uow_factory, stats_cache: StatsCache, sleep: AsyncMock) -> RegisterWriter:
    return RegisterWriter(
        uow_factory=fake_uow_factory,
        numbering=NumberingPolicy(),
        projector=IndexProjector(),
        retry=RetryPolicy(max_attempts=3, backoff_base=0.01, backoff_max=0.05),
        stats_cache=stats_cache,
        sleep=sleep,
    )


@pytest.fixture
def new_entry() -> NewRegisterEntry:
    return NewRegisterEntry(
        executed_at=date(2025, 3, 10),
        nature_of_deed="Akta Jual Beli",
        appearer_names=["Budi Santoso", "Siti Rahma"],
        created_by_actor_id="notary-1",
    )

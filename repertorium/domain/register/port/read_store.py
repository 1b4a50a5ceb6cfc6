from abc import abstractmethod
from typing import Protocol

from repertorium.domain.register.model.entry import RegisterEntry
from repertorium.domain.register.model.index import IndexEntry
from repertorium.domain.register.model.query import (
    IndexFilter,
    LetterCount,
    RegisterFilter,
    RegisterStats,
)
from repertorium.domain.register.model.value import EntryId
from repertorium.domain.shared.port import Port


class RegisterReadStore(Port, Protocol):
    """Read-only access to committed register data. Never touches counters."""

    @abstractmethod
    async def find_entries(self, flt: RegisterFilter) -> tuple[list[RegisterEntry], int]: ...

    @abstractmethod
    async def find_index_entries(self, flt: IndexFilter) -> tuple[list[IndexEntry], int]: ...

    @abstractmethod
    async def get(self, entry_id: EntryId) -> RegisterEntry | None: ...

    @abstractmethod
    async def index_for(self, entry_id: EntryId) -> list[IndexEntry]: ...

    @abstractmethod
    async def stats(self, year: int, office_id: str | None = None) -> RegisterStats: ...

    @abstractmethod
    async def letter_counts(
        self,
        year: int,
        month: int | None = None,
        office_id: str | None = None,
    ) -> list[LetterCount]: ...

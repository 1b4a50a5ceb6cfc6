from abc import abstractmethod
from typing import Protocol

from repertorium.domain.register.model.entry import RegisterEntry
from repertorium.domain.register.model.index import IndexEntry
from repertorium.domain.register.model.value import EntryId
from repertorium.domain.shared.port import Port


class RegisterRepository(Port, Protocol):
    """Write side of the register, bound to one unit of work."""

    @abstractmethod
    async def add(self, entry: RegisterEntry) -> None: ...

    @abstractmethod
    async def add_index_entries(self, rows: list[IndexEntry]) -> None: ...

    @abstractmethod
    async def get(self, entry_id: EntryId) -> RegisterEntry | None: ...

    @abstractmethod
    async def save_amendment(self, entry: RegisterEntry) -> None:
        """Persist administrative fields only (notes, linked document, updated_at)."""
        ...

from abc import abstractmethod
from typing import Protocol

from repertorium.domain.register.model.value import ScopeKey
from repertorium.domain.shared.port import Port


class CounterStore(Port, Protocol):
    """Durable last-issued-number state, one row per scope key.

    Only valid inside a RegisterUnitOfWork: the increment commits or rolls
    back together with the entry that uses it.
    """

    @abstractmethod
    async def allocate_next(self, key: ScopeKey) -> int:
        """Lock the counter row for ``key``, advance it by exactly 1 and return the new value.

        A missing row starts from 0, so the first allocation returns 1.
        """
        ...

    @abstractmethod
    async def peek(self, key: ScopeKey) -> int:
        """Last issued value for ``key`` (0 when none). Takes no lock."""
        ...

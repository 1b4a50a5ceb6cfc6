from typing import Protocol

from repertorium.domain.register.port.counter_store import CounterStore
from repertorium.domain.register.port.repository import RegisterRepository
from repertorium.domain.shared.uow import UnitOfWork


class RegisterUnitOfWork(UnitOfWork):
    """Transaction scope shared by counter allocation and entry/index inserts.

    Implementations translate retryable storage conflicts into
    TransientConflictError and everything else into StorageError, on any
    statement and on commit.
    """

    counters: CounterStore
    entries: RegisterRepository


class UnitOfWorkFactory(Protocol):
    """Opens a fresh, not yet begun unit of work."""

    def __call__(self) -> RegisterUnitOfWork: ...

from repertorium.domain.register.port.counter_store import CounterStore
from repertorium.domain.register.port.read_store import RegisterReadStore
from repertorium.domain.register.port.repository import RegisterRepository
from repertorium.domain.register.port.unit_of_work import (
    RegisterUnitOfWork,
    UnitOfWorkFactory,
)

__all__ = [
    "CounterStore",
    "RegisterReadStore",
    "RegisterRepository",
    "RegisterUnitOfWork",
    "UnitOfWorkFactory",
]

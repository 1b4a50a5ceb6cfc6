from typing import AsyncIterable

from dishka import provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from repertorium.config import Config
from repertorium.domain.register.port.read_store import RegisterReadStore
from repertorium.domain.register.port.unit_of_work import UnitOfWorkFactory
from repertorium.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
)
from repertorium.infrastructure.persistence.repository.read_store import (
    SQLAlchemyRegisterReadStore,
)
from repertorium.infrastructure.persistence.unit_of_work import (
    SQLAlchemyRegisterUnitOfWork,
)
from repertorium.util.di.base import Provider
from repertorium.util.di.scope import Scope


class PersistenceProvider(Provider):
    # APP-scoped factories
    @provide(scope=Scope.APP)
    async def get_engine(self, config: Config) -> AsyncIterable[AsyncEngine]:
        engine = create_db_engine(config)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(self, engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    # Each call opens a fresh transaction; the writer calls it once per attempt
    @provide(scope=Scope.APP)
    def get_uow_factory(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> UnitOfWorkFactory:
        return lambda: SQLAlchemyRegisterUnitOfWork(session_factory)

    @provide(scope=Scope.APP)
    def get_read_store(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> RegisterReadStore:
        return SQLAlchemyRegisterReadStore(session_factory)

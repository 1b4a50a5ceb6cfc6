"""SQLAlchemy-backed register unit of work."""

import logging
from types import TracebackType
from typing import Optional, Type

from sqlalchemy import exc as sa_exc
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from repertorium.domain.register.port.unit_of_work import RegisterUnitOfWork
from repertorium.infrastructure.persistence.counter_store import SQLAlchemyCounterStore
from repertorium.infrastructure.persistence.errors import translate_db_error
from repertorium.infrastructure.persistence.repository.register import (
    SQLAlchemyRegisterRepository,
)

logger = logging.getLogger(__name__)

_DB_ERRORS = (sa_exc.DBAPIError, sa_exc.TimeoutError)


class SQLAlchemyRegisterUnitOfWork(RegisterUnitOfWork):
    """One session, one transaction.

    Counter increments, entry inserts and index inserts all go through the
    same session, so they become visible together on commit or not at all.
    Driver errors raised inside the block or on commit leave as
    TransientConflictError or StorageError.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: AsyncSession | None = None

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("Unit of work has not begun")
        return self._session

    async def begin(self) -> None:
        self._session = self._session_factory()
        self.counters = SQLAlchemyCounterStore(self._session)
        self.entries = SQLAlchemyRegisterRepository(self._session)

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]] = None,
        exc: Optional[BaseException] = None,
        tb: Optional[TracebackType] = None,
    ) -> None:
        try:
            await super().__aexit__(exc_type, exc, tb)
        except _DB_ERRORS as e:
            raise translate_db_error(e) from e
        finally:
            await self._close()

        if isinstance(exc, _DB_ERRORS):
            raise translate_db_error(exc) from exc

    async def _close(self) -> None:
        if self._session is None:
            return
        try:
            await self._session.close()
        except _DB_ERRORS as e:
            logger.warning("Failed to close register session cleanly: %s", e)
        finally:
            self._session = None

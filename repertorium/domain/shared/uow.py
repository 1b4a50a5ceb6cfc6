from abc import ABC, abstractmethod
from types import TracebackType
from typing import Optional, Self, Type


class UnitOfWork(ABC):
    """One database transaction. Commits on clean exit, rolls back on any error."""

    @abstractmethod
    async def begin(self) -> None: ...

    @abstractmethod
    async def commit(self) -> None: ...

    @abstractmethod
    async def rollback(self) -> None: ...

    async def __aenter__(self) -> Self:
        await self.begin()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]] = None,
        exc: Optional[BaseException] = None,
        tb: Optional[TracebackType] = None,
    ) -> None:
        if exc is not None:
            await self.rollback()
        else:
            await self.commit()

"""Filter, sort and result models for register and index queries."""

from datetime import date
from enum import StrEnum
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from repertorium.domain.shared.model.value import ValueObject

T = TypeVar("T")

MAX_PAGE_SIZE = 500


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


class RegisterSortKey(StrEnum):
    YEARLY_SEQ = "yearly_seq"
    EXECUTED_AT = "executed_at"
    NATURE_OF_DEED = "nature_of_deed"


class IndexSortKey(StrEnum):
    NAME = "name"  # first_letter, then appearer_name
    YEARLY_SEQ = "yearly_seq"
    EXECUTED_AT = "executed_at"
    NATURE_OF_DEED = "nature_of_deed"


class _BaseFilter(ValueObject):
    office_id: str | None = None
    year: int | None = None
    month: int | None = None
    is_land_registry_act: bool | None = None
    search: str | None = None
    executed_from: date | None = None
    executed_to: date | None = None
    direction: SortDirection = SortDirection.ASC
    offset: int = 0
    limit: int = 50


class RegisterFilter(_BaseFilter):
    sort: RegisterSortKey = RegisterSortKey.YEARLY_SEQ


class IndexFilter(_BaseFilter):
    first_letter: str | None = None
    sort: IndexSortKey = IndexSortKey.NAME
    limit: int = 100


class Page(BaseModel, Generic[T]):
    """One offset/limit window over a filtered result set."""

    items: list[T]
    total: int
    offset: int
    limit: int

    @property
    def has_more(self) -> bool:
        return self.offset + len(self.items) < self.total


class MonthCount(ValueObject):
    month: int
    count: int


class LetterCount(ValueObject):
    letter: str
    count: int


class RegisterStats(ValueObject):
    """Informational aggregate over committed entries. Never drives allocation."""

    year: int
    total_for_year: int
    last_yearly_seq: int
    per_month_counts: dict[int, int] = Field(default_factory=dict)

    @property
    def months(self) -> list[MonthCount]:
        return [MonthCount(month=m, count=c) for m, c in sorted(self.per_month_counts.items())]

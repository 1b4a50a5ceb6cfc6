"""Value objects for the register domain."""

from enum import StrEnum
from uuid import UUID, uuid4

from pydantic import RootModel, model_validator

from repertorium.domain.shared.model.value import ValueObject

NO_LETTER = "#"
"""Index letter for appearer names that contain no alphabetic character."""


class EntryId(RootModel[UUID]):
    """Unique identifier for a RegisterEntry."""

    @classmethod
    def generate(cls) -> "EntryId":
        return cls(uuid4())

    def __str__(self) -> str:
        return str(self.root)

    def __hash__(self) -> int:
        return hash(self.root)


class IndexEntryId(RootModel[UUID]):
    """Unique identifier for an IndexEntry."""

    @classmethod
    def generate(cls) -> "IndexEntryId":
        return cls(uuid4())

    def __str__(self) -> str:
        return str(self.root)

    def __hash__(self) -> int:
        return hash(self.root)


class ScopeKind(StrEnum):
    YEARLY = "yearly"
    MONTHLY = "monthly"


class NumberPool(StrEnum):
    """Counter pool an entry draws its numbers from."""

    NOTARIAL = "notarial"
    LAND_REGISTRY = "land_registry"  # PPAT acts, when configured as a separate pool


class ScopeKey(ValueObject):
    """Identifies one counter: e.g. yearly/main/notarial/2025 or monthly/.../2025-03."""

    kind: ScopeKind
    office_id: str
    pool: NumberPool
    year: int
    month: int | None = None

    @model_validator(mode="after")
    def _check_month(self) -> "ScopeKey":
        if self.kind == ScopeKind.YEARLY and self.month is not None:
            raise ValueError("yearly scope key cannot carry a month")
        if self.kind == ScopeKind.MONTHLY and not (self.month and 1 <= self.month <= 12):
            raise ValueError("monthly scope key needs a month in 1..12")
        return self

    def __str__(self) -> str:
        period = f"{self.year}" if self.month is None else f"{self.year}-{self.month:02d}"
        return f"{self.kind}/{self.office_id}/{self.pool}/{period}"

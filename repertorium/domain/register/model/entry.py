"""RegisterEntry aggregate - one permanent, numbered record per executed deed."""

from datetime import UTC, date, datetime
from typing import Any

from pydantic import Field

from repertorium.domain.register.model.value import EntryId, NumberPool
from repertorium.domain.shared.error import ValidationError
from repertorium.domain.shared.model.aggregate import Aggregate
from repertorium.domain.shared.model.value import ValueObject

AMENDABLE_FIELDS = frozenset({"notes", "linked_document_id"})


class NewRegisterEntry(ValueObject):
    """Caller input for creating a register entry, before any number is allocated."""

    executed_at: date | None = None
    nature_of_deed: str = ""
    appearer_names: list[str] = []
    notes: str | None = None
    is_land_registry_act: bool = False
    linked_document_id: str | None = None
    created_by_actor_id: str = ""
    office_id: str | None = None


class RegisterEntry(Aggregate):
    """A deed in the register.

    ``(yearly_seq, year)`` is the entry's legal identity. Numbering fields are
    frozen; only ``notes`` and ``linked_document_id`` can be corrected.
    """

    id: EntryId = Field(frozen=True)
    office_id: str = Field(frozen=True)
    pool: NumberPool = Field(frozen=True)
    yearly_seq: int = Field(frozen=True, ge=1)
    monthly_seq: int = Field(frozen=True, ge=1)
    year: int = Field(frozen=True)
    month: int = Field(frozen=True, ge=1, le=12)
    executed_at: date = Field(frozen=True)
    nature_of_deed: str = Field(frozen=True)
    appearer_names: list[str] = Field(frozen=True, min_length=1)
    notes: str | None = None
    is_land_registry_act: bool = Field(default=False, frozen=True)
    linked_document_id: str | None = None
    created_by_actor_id: str = Field(frozen=True)
    created_at: datetime = Field(frozen=True)
    updated_at: datetime | None = None

    def amend(self, changes: dict[str, Any]) -> None:
        """Correct administrative fields. Never touches numbering."""
        illegal = sorted(set(changes) - AMENDABLE_FIELDS)
        if illegal:
            raise ValidationError(
                f"Field '{illegal[0]}' cannot be changed after registration",
                field=illegal[0],
            )
        for name, value in changes.items():
            if isinstance(value, str):
                value = value.strip() or None
            setattr(self, name, value)
        self.updated_at = datetime.now(UTC)

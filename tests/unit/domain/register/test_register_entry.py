"""Unit tests for the RegisterEntry aggregate."""

from datetime import UTC, date, datetime

import pytest
from pydantic import ValidationError as PydanticValidationError

from repertorium.domain.register.model.entry import RegisterEntry
from repertorium.domain.register.model.value import EntryId, NumberPool
from repertorium.domain.shared.error import ValidationError


@pytest.fixture
def entry() -> RegisterEntry:
    return RegisterEntry(
        id=EntryId.generate(),
        office_id="main",
        pool=NumberPool.NOTARIAL,
        yearly_seq=3,
        monthly_seq=1,
        year=2025,
        month=4,
        executed_at=date(2025, 4, 1),
        nature_of_deed="Akta Pendirian PT",
        appearer_names=["Dewi"],
        notes="draft",
        created_by_actor_id="notary-1",
        created_at=datetime.now(UTC),
    )


class TestAmend:
    def test_updates_notes_and_timestamp(self, entry: RegisterEntry):
        entry.amend({"notes": "  final  "})

        assert entry.notes == "final"
        assert entry.updated_at is not None

    def test_blank_string_clears(self, entry: RegisterEntry):
        entry.amend({"notes": " "})

        assert entry.notes is None

    def test_rejects_numbering_fields(self, entry: RegisterEntry):
        with pytest.raises(ValidationError) as exc_info:
            entry.amend({"monthly_seq": 9})

        assert exc_info.value.field == "monthly_seq"
        assert entry.monthly_seq == 1


class TestInvariants:
    def test_numbering_fields_are_frozen(self, entry: RegisterEntry):
        with pytest.raises(PydanticValidationError):
            entry.yearly_seq = 99

    def test_sequence_starts_at_one(self, entry: RegisterEntry):
        with pytest.raises(PydanticValidationError):
            RegisterEntry(**{**entry.model_dump(), "yearly_seq": 0})

    def test_requires_an_appearer(self, entry: RegisterEntry):
        with pytest.raises(PydanticValidationError):
            RegisterEntry(**{**entry.model_dump(), "appearer_names": []})

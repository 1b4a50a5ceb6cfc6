"""Register mappers - convert between domain and persistence."""

from datetime import UTC, date, datetime
from typing import Any
from uuid import UUID

from repertorium.domain.register.model.entry import RegisterEntry
from repertorium.domain.register.model.index import IndexEntry
from repertorium.domain.register.model.value import EntryId, IndexEntryId, NumberPool


def _aware(value: datetime | str | None) -> datetime | None:
    # SQLite hands back naive datetimes (or strings) for timezone-aware columns
    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value


def _date(value: date | str) -> date:
    if isinstance(value, str):
        return date.fromisoformat(value)
    if isinstance(value, datetime):
        return value.date()
    return value


def row_to_entry(row: dict[str, Any]) -> RegisterEntry:
    """Convert database row to RegisterEntry aggregate."""
    return RegisterEntry(
        id=EntryId(UUID(row["id"])),
        office_id=row["office_id"],
        pool=NumberPool(row["pool"]),
        yearly_seq=row["yearly_seq"],
        monthly_seq=row["monthly_seq"],
        year=row["year"],
        month=row["month"],
        executed_at=_date(row["executed_at"]),
        nature_of_deed=row["nature_of_deed"],
        appearer_names=list(row.get("appearer_names") or []),
        notes=row.get("notes"),
        is_land_registry_act=bool(row["is_land_registry_act"]),
        linked_document_id=row.get("linked_document_id"),
        created_by_actor_id=row["created_by_actor_id"],
        created_at=_aware(row["created_at"]),
        updated_at=_aware(row.get("updated_at")),
    )


def entry_to_dict(entry: RegisterEntry) -> dict[str, Any]:
    """Convert RegisterEntry aggregate to database dict."""
    return {
        "id": str(entry.id),
        "office_id": entry.office_id,
        "pool": str(entry.pool),
        "yearly_seq": entry.yearly_seq,
        "monthly_seq": entry.monthly_seq,
        "year": entry.year,
        "month": entry.month,
        "executed_at": entry.executed_at,
        "nature_of_deed": entry.nature_of_deed,
        "appearer_names": list(entry.appearer_names),
        "notes": entry.notes,
        "is_land_registry_act": entry.is_land_registry_act,
        "linked_document_id": entry.linked_document_id,
        "created_by_actor_id": entry.created_by_actor_id,
        "created_at": entry.created_at,
        "updated_at": entry.updated_at,
    }


def row_to_index_entry(row: dict[str, Any]) -> IndexEntry:
    """Convert database row to IndexEntry."""
    return IndexEntry(
        id=IndexEntryId(UUID(row["id"])),
        register_entry_id=EntryId(UUID(row["register_entry_id"])),
        appearer_name=row["appearer_name"],
        first_letter=row["first_letter"],
        nature_of_deed=row["nature_of_deed"],
        executed_at=_date(row["executed_at"]),
        yearly_seq=row["yearly_seq"],
        office_id=row["office_id"],
        year=row["year"],
        month=row["month"],
    )


def index_entry_to_dict(row: IndexEntry, position: int) -> dict[str, Any]:
    """Convert IndexEntry to database dict. ``position`` keeps appearer order."""
    return {
        "id": str(row.id),
        "register_entry_id": str(row.register_entry_id),
        "position": position,
        "appearer_name": row.appearer_name,
        "first_letter": row.first_letter,
        "nature_of_deed": row.nature_of_deed,
        "executed_at": row.executed_at,
        "yearly_seq": row.yearly_seq,
        "office_id": row.office_id,
        "year": row.year,
        "month": row.month,
    }

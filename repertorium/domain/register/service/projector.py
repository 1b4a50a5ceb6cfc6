"""IndexProjector - derives klapper rows from a numbered register entry."""

from repertorium.domain.register.model.entry import RegisterEntry
from repertorium.domain.register.model.index import IndexEntry
from repertorium.domain.register.model.value import NO_LETTER, IndexEntryId


def first_letter(name: str) -> str:
    """Upper-cased first letter of ``name``, skipping leading non-letters; ``#`` if none."""
    for ch in name.strip():
        if ch.isalpha():
            return ch.upper()[0]
    return NO_LETTER


class IndexProjector:
    """Pure projection: one IndexEntry per appearer name, no numbering of its own.

    Runs inside the writer's unit of work, after numbers are allocated and
    before commit.
    """

    def project(self, entry: RegisterEntry) -> list[IndexEntry]:
        rows = []
        for raw_name in entry.appearer_names:
            name = raw_name.strip()
            rows.append(
                IndexEntry(
                    id=IndexEntryId.generate(),
                    register_entry_id=entry.id,
                    appearer_name=name,
                    first_letter=first_letter(name),
                    nature_of_deed=entry.nature_of_deed,
                    executed_at=entry.executed_at,
                    yearly_seq=entry.yearly_seq,
                    office_id=entry.office_id,
                    year=entry.year,
                    month=entry.month,
                )
            )
        return rows

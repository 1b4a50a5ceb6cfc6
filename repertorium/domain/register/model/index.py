"""IndexEntry - name-index (klapper) row derived from a RegisterEntry."""

from datetime import date

from repertorium.domain.register.model.value import EntryId, IndexEntryId
from repertorium.domain.shared.model.value import ValueObject


class IndexEntry(ValueObject):
    """One appearer of one deed.

    Everything except ``id``, ``appearer_name`` and ``first_letter`` is a
    denormalized copy of the parent entry: derived, recomputable, never
    authoritative.
    """

    id: IndexEntryId
    register_entry_id: EntryId
    appearer_name: str
    first_letter: str
    nature_of_deed: str
    executed_at: date
    yearly_seq: int
    office_id: str
    year: int
    month: int

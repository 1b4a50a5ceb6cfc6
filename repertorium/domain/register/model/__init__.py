"""Register domain model."""

from repertorium.domain.register.model.entry import NewRegisterEntry, RegisterEntry
from repertorium.domain.register.model.index import IndexEntry
from repertorium.domain.register.model.query import (
    IndexFilter,
    IndexSortKey,
    LetterCount,
    Page,
    RegisterFilter,
    RegisterSortKey,
    RegisterStats,
    SortDirection,
)
from repertorium.domain.register.model.value import (
    NO_LETTER,
    EntryId,
    IndexEntryId,
    NumberPool,
    ScopeKey,
    ScopeKind,
)

__all__ = [
    "NO_LETTER",
    "EntryId",
    "IndexEntry",
    "IndexEntryId",
    "IndexFilter",
    "IndexSortKey",
    "LetterCount",
    "NewRegisterEntry",
    "NumberPool",
    "Page",
    "RegisterEntry",
    "RegisterFilter",
    "RegisterSortKey",
    "RegisterStats",
    "ScopeKey",
    "ScopeKind",
    "SortDirection",
]

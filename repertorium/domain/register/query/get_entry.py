"""GetRegisterEntry query handler - one entry with its name-index rows."""

from repertorium.domain.register.model.entry import RegisterEntry
from repertorium.domain.register.model.index import IndexEntry
from repertorium.domain.register.model.value import EntryId
from repertorium.domain.register.service.reader import RegisterReader
from repertorium.domain.shared.query import Query, QueryHandler, Result


class GetRegisterEntry(Query):
    entry_id: EntryId


class RegisterEntryDetail(Result):
    entry: RegisterEntry
    index_entries: list[IndexEntry]


class GetRegisterEntryHandler(QueryHandler[GetRegisterEntry, RegisterEntryDetail]):
    register_reader: RegisterReader

    async def run(self, cmd: GetRegisterEntry) -> RegisterEntryDetail:
        entry = await self.register_reader.get(cmd.entry_id)
        index_entries = await self.register_reader.index_for(cmd.entry_id)
        return RegisterEntryDetail(entry=entry, index_entries=index_entries)

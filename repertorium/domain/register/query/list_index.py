from repertorium.domain.register.model.index import IndexEntry
from repertorium.domain.register.model.query import IndexFilter
from repertorium.domain.register.service.reader import RegisterReader
from repertorium.domain.shared.query import Query, QueryHandler, Result


class ListIndexEntries(Query):
    filter: IndexFilter = IndexFilter()


class IndexEntryList(Result):
    items: list[IndexEntry]
    total: int
    offset: int
    limit: int
    has_more: bool


class ListIndexEntriesHandler(QueryHandler[ListIndexEntries, IndexEntryList]):
    register_reader: RegisterReader

    async def run(self, cmd: ListIndexEntries) -> IndexEntryList:
        page = await self.register_reader.query_index(cmd.filter)
        return IndexEntryList(
            items=page.items,
            total=page.total,
            offset=page.offset,
            limit=page.limit,
            has_more=page.has_more,
        )

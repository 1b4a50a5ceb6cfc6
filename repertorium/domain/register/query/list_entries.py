from repertorium.domain.register.model.entry import RegisterEntry
from repertorium.domain.register.model.query import RegisterFilter
from repertorium.domain.register.service.reader import RegisterReader
from repertorium.domain.shared.query import Query, QueryHandler, Result


class ListRegisterEntries(Query):
    filter: RegisterFilter = RegisterFilter()


class RegisterEntryList(Result):
    items: list[RegisterEntry]
    total: int
    offset: int
    limit: int
    has_more: bool


class ListRegisterEntriesHandler(QueryHandler[ListRegisterEntries, RegisterEntryList]):
    register_reader: RegisterReader

    async def run(self, cmd: ListRegisterEntries) -> RegisterEntryList:
        page = await self.register_reader.query(cmd.filter)
        return RegisterEntryList(
            items=page.items,
            total=page.total,
            offset=page.offset,
            limit=page.limit,
            has_more=page.has_more,
        )

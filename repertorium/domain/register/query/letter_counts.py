from repertorium.domain.register.model.query import LetterCount
from repertorium.domain.register.service.reader import RegisterReader
from repertorium.domain.shared.query import Query, QueryHandler, Result


class GetLetterCounts(Query):
    year: int
    month: int | None = None
    office_id: str | None = None


class LetterCountList(Result):
    letters: list[LetterCount]


class GetLetterCountsHandler(QueryHandler[GetLetterCounts, LetterCountList]):
    register_reader: RegisterReader

    async def run(self, cmd: GetLetterCounts) -> LetterCountList:
        letters = await self.register_reader.letter_counts(cmd.year, cmd.month, cmd.office_id)
        return LetterCountList(letters=letters)

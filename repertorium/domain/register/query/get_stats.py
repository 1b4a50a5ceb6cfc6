from repertorium.domain.register.model.query import MonthCount
from repertorium.domain.register.service.reader import RegisterReader
from repertorium.domain.shared.query import Query, QueryHandler, Result


class GetRegisterStats(Query):
    year: int
    office_id: str | None = None


class RegisterStatsResult(Result):
    year: int
    total_for_year: int
    last_yearly_seq: int
    per_month_counts: list[MonthCount]


class GetRegisterStatsHandler(QueryHandler[GetRegisterStats, RegisterStatsResult]):
    register_reader: RegisterReader

    async def run(self, cmd: GetRegisterStats) -> RegisterStatsResult:
        stats = await self.register_reader.stats(cmd.year, cmd.office_id)
        return RegisterStatsResult(
            year=stats.year,
            total_for_year=stats.total_for_year,
            last_yearly_seq=stats.last_yearly_seq,
            per_month_counts=stats.months,
        )

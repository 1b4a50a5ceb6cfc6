"""Klapper (alphabetical name index) REST routes."""

from datetime import date

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from repertorium.domain.register.model.query import (
    IndexFilter,
    IndexSortKey,
    SortDirection,
)
from repertorium.domain.register.query.letter_counts import (
    GetLetterCounts,
    GetLetterCountsHandler,
    LetterCountList,
)
from repertorium.domain.register.query.list_index import (
    IndexEntryList,
    ListIndexEntries,
    ListIndexEntriesHandler,
)

router = APIRouter(prefix="/klapper", tags=["Klapper"], route_class=DishkaRoute)


@router.get("", response_model=IndexEntryList)
async def list_index_entries(
    handler: FromDishka[ListIndexEntriesHandler],
    year: int | None = None,
    month: int | None = None,
    office_id: str | None = None,
    first_letter: str | None = None,
    is_land_registry_act: bool | None = None,
    search: str | None = None,
    executed_from: date | None = None,
    executed_to: date | None = None,
    sort: IndexSortKey = IndexSortKey.NAME,
    direction: SortDirection = SortDirection.ASC,
    offset: int = 0,
    limit: int = 100,
) -> IndexEntryList:
    flt = IndexFilter(
        year=year,
        month=month,
        office_id=office_id,
        first_letter=first_letter,
        is_land_registry_act=is_land_registry_act,
        search=search,
        executed_from=executed_from,
        executed_to=executed_to,
        sort=sort,
        direction=direction,
        offset=offset,
        limit=limit,
    )
    return await handler.run(ListIndexEntries(filter=flt))


@router.get("/letters", response_model=LetterCountList)
async def letter_counts(
    year: int,
    handler: FromDishka[GetLetterCountsHandler],
    month: int | None = None,
    office_id: str | None = None,
) -> LetterCountList:
    return await handler.run(GetLetterCounts(year=year, month=month, office_id=office_id))

"""Repertorium (deed register) REST routes."""

from datetime import date
from typing import Annotated, Any
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Body, Header

from repertorium.domain.register.command.amend_entry import (
    AmendRegisterEntry,
    AmendRegisterEntryHandler,
    EntryAmended,
)
from repertorium.domain.register.command.create_entry import (
    CreateRegisterEntry,
    CreateRegisterEntryHandler,
    EntryRegistered,
)
from repertorium.domain.register.model.query import (
    RegisterFilter,
    RegisterSortKey,
    SortDirection,
)
from repertorium.domain.register.model.value import EntryId
from repertorium.domain.register.query.get_entry import (
    GetRegisterEntry,
    GetRegisterEntryHandler,
    RegisterEntryDetail,
)
from repertorium.domain.register.query.get_stats import (
    GetRegisterStats,
    GetRegisterStatsHandler,
    RegisterStatsResult,
)
from repertorium.domain.register.query.list_entries import (
    ListRegisterEntries,
    ListRegisterEntriesHandler,
    RegisterEntryList,
)

router = APIRouter(prefix="/repertorium", tags=["Repertorium"], route_class=DishkaRoute)

ActorId = Annotated[str | None, Header(alias="X-Actor-Id")]


@router.post("", response_model=EntryRegistered, status_code=201)
async def create_entry(
    body: CreateRegisterEntry,
    handler: FromDishka[CreateRegisterEntryHandler],
    actor_id: ActorId = None,
) -> EntryRegistered:
    # The acting user always comes from the authenticated header, never the body
    cmd = body.model_copy(update={"created_by_actor_id": actor_id or ""})
    return await handler.run(cmd)


@router.get("", response_model=RegisterEntryList)
async def list_entries(
    handler: FromDishka[ListRegisterEntriesHandler],
    year: int | None = None,
    month: int | None = None,
    office_id: str | None = None,
    is_land_registry_act: bool | None = None,
    search: str | None = None,
    executed_from: date | None = None,
    executed_to: date | None = None,
    sort: RegisterSortKey = RegisterSortKey.YEARLY_SEQ,
    direction: SortDirection = SortDirection.ASC,
    offset: int = 0,
    limit: int = 50,
) -> RegisterEntryList:
    flt = RegisterFilter(
        year=year,
        month=month,
        office_id=office_id,
        is_land_registry_act=is_land_registry_act,
        search=search,
        executed_from=executed_from,
        executed_to=executed_to,
        sort=sort,
        direction=direction,
        offset=offset,
        limit=limit,
    )
    return await handler.run(ListRegisterEntries(filter=flt))


@router.get("/stats/{year}", response_model=RegisterStatsResult)
async def get_stats(
    year: int,
    handler: FromDishka[GetRegisterStatsHandler],
    office_id: str | None = None,
) -> RegisterStatsResult:
    return await handler.run(GetRegisterStats(year=year, office_id=office_id))


@router.get("/{entry_id}", response_model=RegisterEntryDetail)
async def get_entry(
    entry_id: UUID,
    handler: FromDishka[GetRegisterEntryHandler],
) -> RegisterEntryDetail:
    return await handler.run(GetRegisterEntry(entry_id=EntryId(entry_id)))


@router.patch("/{entry_id}", response_model=EntryAmended)
async def amend_entry(
    entry_id: UUID,
    body: Annotated[dict[str, Any], Body()],
    handler: FromDishka[AmendRegisterEntryHandler],
) -> EntryAmended:
    return await handler.run(AmendRegisterEntry(entry_id=EntryId(entry_id), changes=body))

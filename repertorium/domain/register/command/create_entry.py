from datetime import date

import logfire

from repertorium.domain.register.model.entry import NewRegisterEntry, RegisterEntry
from repertorium.domain.register.service.writer import RegisterWriter
from repertorium.domain.shared.command import Command, CommandHandler, Result


class CreateRegisterEntry(Command):
    executed_at: date | None = None
    nature_of_deed: str = ""
    appearer_names: list[str] = []
    notes: str | None = None
    is_land_registry_act: bool = False
    linked_document_id: str | None = None
    created_by_actor_id: str = ""
    office_id: str | None = None


class EntryRegistered(Result):
    entry: RegisterEntry


class CreateRegisterEntryHandler(CommandHandler[CreateRegisterEntry, EntryRegistered]):
    register_writer: RegisterWriter

    async def run(self, cmd: CreateRegisterEntry) -> EntryRegistered:
        with logfire.span("CreateRegisterEntry"):
            entry = await self.register_writer.create_entry(
                NewRegisterEntry(**cmd.model_dump())
            )
            return EntryRegistered(entry=entry)

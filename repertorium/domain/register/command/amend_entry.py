from typing import Any

import logfire

from repertorium.domain.register.model.entry import RegisterEntry
from repertorium.domain.register.model.value import EntryId
from repertorium.domain.register.service.writer import RegisterWriter
from repertorium.domain.shared.command import Command, CommandHandler, Result


class AmendRegisterEntry(Command):
    """Administrative correction. Keys present in ``changes`` are set; null clears."""

    entry_id: EntryId
    changes: dict[str, Any]


class EntryAmended(Result):
    entry: RegisterEntry


class AmendRegisterEntryHandler(CommandHandler[AmendRegisterEntry, EntryAmended]):
    register_writer: RegisterWriter

    async def run(self, cmd: AmendRegisterEntry) -> EntryAmended:
        with logfire.span("AmendRegisterEntry"):
            entry = await self.register_writer.amend_entry(cmd.entry_id, cmd.changes)
            return EntryAmended(entry=entry)

"""RegisterWriter - the only path that creates register entries."""

import asyncio
import logging
import random
from datetime import UTC, date, datetime
from typing import Any, Awaitable, Callable, TypeVar

from repertorium.domain.register.model.entry import (
    AMENDABLE_FIELDS,
    NewRegisterEntry,
    RegisterEntry,
)
from repertorium.domain.register.model.value import EntryId, ScopeKey
from repertorium.domain.register.port.unit_of_work import UnitOfWorkFactory
from repertorium.domain.register.service.numbering import NumberingPolicy
from repertorium.domain.register.service.projector import IndexProjector
from repertorium.domain.register.service.stats_cache import StatsCache
from repertorium.domain.shared.error import (
    ContentionError,
    NotFoundError,
    TransientConflictError,
    ValidationError,
)
from repertorium.domain.shared.model.value import ValueObject
from repertorium.domain.shared.service import Service

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryPolicy(ValueObject):
    """Bounded exponential backoff with jitter for transient conflicts."""

    max_attempts: int = 5
    backoff_base: float = 0.05  # seconds before the 2nd attempt
    backoff_max: float = 1.0

    def delay(self, attempt: int) -> float:
        """Sleep before attempt ``attempt + 1``, given ``attempt`` failed (1-based)."""
        base = min(self.backoff_max, self.backoff_base * 2 ** (attempt - 1))
        return base * random.uniform(1.0, 1.25)


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


class RegisterWriter(Service):
    """Allocates yearly and monthly numbers and persists an entry with its index rows.

    Every attempt is one unit of work: counter increments, the entry insert and
    the index inserts commit together or not at all. A transient conflict
    restarts the whole unit of work with fresh counter reads.
    """

    uow_factory: UnitOfWorkFactory
    numbering: NumberingPolicy
    projector: IndexProjector
    retry: RetryPolicy
    stats_cache: StatsCache | None = None
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep

    async def create_entry(self, data: NewRegisterEntry) -> RegisterEntry:
        """Register a new deed. Raises ValidationError before any number is consumed."""
        data, executed_at = self._validate(data)
        yearly_key, monthly_key = self.numbering.scope_keys(
            executed_at,
            data.is_land_registry_act,
            office_id=data.office_id,
        )

        entry = await self._with_retry(
            lambda: self._create_once(data, executed_at, yearly_key, monthly_key),
            what=f"create entry in {yearly_key}",
        )

        logger.info(
            "Registered deed %s/%s (monthly %s) as %s",
            entry.yearly_seq,
            entry.year,
            entry.monthly_seq,
            entry.id,
        )
        if self.stats_cache is not None:
            self.stats_cache.invalidate(entry.year)
        return entry

    async def amend_entry(self, entry_id: EntryId, changes: dict[str, Any]) -> RegisterEntry:
        """Correct notes / linked document. Numbering and index rows stay as they are."""
        if not changes:
            raise ValidationError("Nothing to amend")
        for name, value in changes.items():
            if name not in AMENDABLE_FIELDS:
                raise ValidationError(
                    f"Field '{name}' cannot be changed after registration", field=name
                )
            if value is not None and not isinstance(value, str):
                raise ValidationError(f"Field '{name}' must be text or null", field=name)

        async def _amend() -> RegisterEntry:
            async with self.uow_factory() as uow:
                entry = await uow.entries.get(entry_id)
                if entry is None:
                    raise NotFoundError(f"Register entry not found: {entry_id}")
                entry.amend(changes)
                await uow.entries.save_amendment(entry)
            return entry

        entry = await self._with_retry(_amend, what=f"amend entry {entry_id}")
        logger.info("Amended register entry %s: %s", entry_id, sorted(changes))
        return entry

    async def _create_once(
        self,
        data: NewRegisterEntry,
        executed_at: date,
        yearly_key: ScopeKey,
        monthly_key: ScopeKey,
    ) -> RegisterEntry:
        async with self.uow_factory() as uow:
            # Lock order: yearly before monthly, for every writer.
            yearly_seq = await uow.counters.allocate_next(yearly_key)
            monthly_seq = await uow.counters.allocate_next(monthly_key)

            entry = RegisterEntry(
                id=EntryId.generate(),
                office_id=yearly_key.office_id,
                pool=yearly_key.pool,
                yearly_seq=yearly_seq,
                monthly_seq=monthly_seq,
                year=executed_at.year,
                month=executed_at.month,
                executed_at=executed_at,
                nature_of_deed=data.nature_of_deed,
                appearer_names=data.appearer_names,
                notes=data.notes,
                is_land_registry_act=data.is_land_registry_act,
                linked_document_id=data.linked_document_id,
                created_by_actor_id=data.created_by_actor_id,
                created_at=datetime.now(UTC),
            )
            await uow.entries.add(entry)
            await uow.entries.add_index_entries(self.projector.project(entry))
        return entry

    async def _with_retry(self, operation: Callable[[], Awaitable[T]], what: str) -> T:
        attempts = self.retry.max_attempts
        for attempt in range(1, attempts + 1):
            try:
                return await operation()
            except TransientConflictError as e:
                if attempt >= attempts:
                    logger.error("Giving up on %s after %d attempts: %s", what, attempt, e)
                    raise ContentionError(
                        "The register is busy, please try again",
                        attempts=attempt,
                    ) from e
                delay = self.retry.delay(attempt)
                logger.warning(
                    "Conflict on %s (attempt %d/%d), retrying in %.3fs: %s",
                    what,
                    attempt,
                    attempts,
                    delay,
                    e,
                )
                await self.sleep(delay)
        raise ContentionError("The register is busy, please try again", attempts=0)

    def _validate(self, data: NewRegisterEntry) -> tuple[NewRegisterEntry, date]:
        executed_at = data.executed_at
        if executed_at is None:
            raise ValidationError("Deed date is required", field="executed_at")

        nature = data.nature_of_deed.strip()
        if not nature:
            raise ValidationError("Nature of deed is required", field="nature_of_deed")

        names = [n.strip() for n in data.appearer_names]
        if not names:
            raise ValidationError(
                "At least one appearer name is required", field="appearer_names"
            )
        for i, name in enumerate(names):
            if not name:
                raise ValidationError(
                    f"Appearer name #{i + 1} is empty", field="appearer_names"
                )

        actor = data.created_by_actor_id.strip()
        if not actor:
            raise ValidationError("Acting user is required", field="created_by_actor_id")

        cleaned = data.model_copy(
            update={
                "nature_of_deed": nature,
                "appearer_names": names,
                "created_by_actor_id": actor,
                "notes": _clean(data.notes),
                "linked_document_id": _clean(data.linked_document_id),
                "office_id": _clean(data.office_id),
            }
        )
        return cleaned, executed_at

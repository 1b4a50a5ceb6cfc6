"""Scope-key policy: which counters a new entry draws its numbers from."""

from datetime import date

from repertorium.domain.register.model.value import NumberPool, ScopeKey, ScopeKind
from repertorium.domain.shared.model.value import ValueObject


class NumberingPolicy(ValueObject):
    """Maps (office, deed date, PPAT flag) to yearly and monthly scope keys.

    Whether PPAT acts share the notarial counters is an office decision, so it
    is configuration rather than code.
    """

    default_office_id: str = "main"
    separate_land_registry_pool: bool = False

    def pool_for(self, is_land_registry_act: bool) -> NumberPool:
        if is_land_registry_act and self.separate_land_registry_pool:
            return NumberPool.LAND_REGISTRY
        return NumberPool.NOTARIAL

    def scope_keys(
        self,
        executed_at: date,
        is_land_registry_act: bool,
        office_id: str | None = None,
    ) -> tuple[ScopeKey, ScopeKey]:
        """Return ``(yearly, monthly)`` keys. Scope follows the deed date, not wall-clock time."""
        office = office_id or self.default_office_id
        pool = self.pool_for(is_land_registry_act)
        yearly = ScopeKey(
            kind=ScopeKind.YEARLY,
            office_id=office,
            pool=pool,
            year=executed_at.year,
        )
        monthly = ScopeKey(
            kind=ScopeKind.MONTHLY,
            office_id=office,
            pool=pool,
            year=executed_at.year,
            month=executed_at.month,
        )
        return yearly, monthly

"""SQLAlchemy table definitions - dialect-agnostic (works with SQLite and PostgreSQL)."""

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.types import JSON

# Metadata object for all tables
metadata = MetaData()

YEARLY_MONTH = 0
"""Stored month for yearly counters (NULL would never collide in the unique key)."""

# ============================================================================
# REGISTER COUNTERS TABLE (last issued number per scope key)
# ============================================================================
register_counters_table = Table(
    "register_counters",
    metadata,
    Column("scope_kind", String(16), nullable=False),  # ScopeKind as string
    Column("office_id", String(64), nullable=False),
    Column("pool", String(32), nullable=False),  # NumberPool as string
    Column("year", Integer, nullable=False),
    Column("month", Integer, nullable=False, server_default=text("0")),
    Column("last_issued", Integer, nullable=False, server_default=text("0")),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    UniqueConstraint(
        "scope_kind",
        "office_id",
        "pool",
        "year",
        "month",
        name="uq_register_counter_scope",
    ),
)


# ============================================================================
# REGISTER ENTRIES TABLE (repertorium, append-only)
# ============================================================================
register_entries_table = Table(
    "register_entries",
    metadata,
    Column("id", String, primary_key=True),
    Column("office_id", String(64), nullable=False),
    Column("pool", String(32), nullable=False),
    Column("yearly_seq", Integer, nullable=False),
    Column("monthly_seq", Integer, nullable=False),
    Column("year", Integer, nullable=False),
    Column("month", Integer, nullable=False),
    Column("executed_at", Date, nullable=False),
    Column("nature_of_deed", Text, nullable=False),
    Column("appearer_names", JSON, nullable=False),  # ordered list of names
    Column("notes", Text, nullable=True),
    Column("is_land_registry_act", Boolean, nullable=False, server_default=text("false")),
    Column("linked_document_id", String, nullable=True),
    Column("created_by_actor_id", String, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=True),
    # Last line of defence behind the counters: a number is never issued twice
    UniqueConstraint("office_id", "pool", "year", "yearly_seq", name="uq_register_yearly_seq"),
    UniqueConstraint(
        "office_id",
        "pool",
        "year",
        "month",
        "monthly_seq",
        name="uq_register_monthly_seq",
    ),
)

Index("idx_register_entries_year_month", register_entries_table.c.year, register_entries_table.c.month)
Index("idx_register_entries_executed_at", register_entries_table.c.executed_at)
Index("idx_register_entries_document", register_entries_table.c.linked_document_id)


# ============================================================================
# INDEX ENTRIES TABLE (klapper; denormalized, derived from register_entries)
# ============================================================================
index_entries_table = Table(
    "index_entries",
    metadata,
    Column("id", String, primary_key=True),
    Column(
        "register_entry_id",
        String,
        ForeignKey("register_entries.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("position", Integer, nullable=False),  # order within appearer_names
    Column("appearer_name", Text, nullable=False),
    Column("first_letter", String(4), nullable=False),
    Column("nature_of_deed", Text, nullable=False),
    Column("executed_at", Date, nullable=False),
    Column("yearly_seq", Integer, nullable=False),
    Column("office_id", String(64), nullable=False),
    Column("year", Integer, nullable=False),
    Column("month", Integer, nullable=False),
)

Index("idx_index_entries_register_entry", index_entries_table.c.register_entry_id)
Index(
    "idx_index_entries_browse",
    index_entries_table.c.year,
    index_entries_table.c.first_letter,
    index_entries_table.c.appearer_name,
)

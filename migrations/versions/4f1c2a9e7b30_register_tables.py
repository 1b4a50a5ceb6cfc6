"""register_tables

Revision ID: 4f1c2a9e7b30
Revises:
Create Date: 2026-10-19 09:12:41.318205

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4f1c2a9e7b30"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # REGISTER COUNTERS
    op.create_table(
        "register_counters",
        sa.Column("scope_kind", sa.String(16), nullable=False),
        sa.Column("office_id", sa.String(64), nullable=False),
        sa.Column("pool", sa.String(32), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("month", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("last_issued", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint(
            "scope_kind",
            "office_id",
            "pool",
            "year",
            "month",
            name="uq_register_counter_scope",
        ),
    )

    # REGISTER ENTRIES
    op.create_table(
        "register_entries",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("office_id", sa.String(64), nullable=False),
        sa.Column("pool", sa.String(32), nullable=False),
        sa.Column("yearly_seq", sa.Integer(), nullable=False),
        sa.Column("monthly_seq", sa.Integer(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("month", sa.Integer(), nullable=False),
        sa.Column("executed_at", sa.Date(), nullable=False),
        sa.Column("nature_of_deed", sa.Text(), nullable=False),
        sa.Column("appearer_names", sa.JSON(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "is_land_registry_act",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("false"),
        ),
        sa.Column("linked_document_id", sa.String(), nullable=True),
        sa.Column("created_by_actor_id", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "office_id", "pool", "year", "yearly_seq", name="uq_register_yearly_seq"
        ),
        sa.UniqueConstraint(
            "office_id",
            "pool",
            "year",
            "month",
            "monthly_seq",
            name="uq_register_monthly_seq",
        ),
    )
    op.create_index("idx_register_entries_year_month", "register_entries", ["year", "month"])
    op.create_index("idx_register_entries_executed_at", "register_entries", ["executed_at"])
    op.create_index("idx_register_entries_document", "register_entries", ["linked_document_id"])

    # INDEX ENTRIES (klapper)
    op.create_table(
        "index_entries",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("register_entry_id", sa.String(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("appearer_name", sa.Text(), nullable=False),
        sa.Column("first_letter", sa.String(4), nullable=False),
        sa.Column("nature_of_deed", sa.Text(), nullable=False),
        sa.Column("executed_at", sa.Date(), nullable=False),
        sa.Column("yearly_seq", sa.Integer(), nullable=False),
        sa.Column("office_id", sa.String(64), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("month", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["register_entry_id"], ["register_entries.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_index_entries_register_entry", "index_entries", ["register_entry_id"])
    op.create_index(
        "idx_index_entries_browse",
        "index_entries",
        ["year", "first_letter", "appearer_name"],
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_index_entries_browse", table_name="index_entries")
    op.drop_index("idx_index_entries_register_entry", table_name="index_entries")
    op.drop_table("index_entries")
    op.drop_index("idx_register_entries_document", table_name="register_entries")
    op.drop_index("idx_register_entries_executed_at", table_name="register_entries")
    op.drop_index("idx_register_entries_year_month", table_name="register_entries")
    op.drop_table("register_entries")
    op.drop_table("register_counters")

"""reconciliation_records

Durable ledger of failed index operations. One row per
(operation_kind, entity_id).

Revision ID: 3f1c2a7d9b10
Revises:
Create Date: 2026-10-18

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c2a7d9b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "reconciliation_records",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("operation_kind", sa.String(16), nullable=False),
        sa.Column("entity_id", sa.String(36), nullable=False),
        sa.Column("error_message", sa.Text(), nullable=False),
        sa.Column("attempt_count", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("first_failed_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_failed_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "operation_kind", "entity_id", name="uq_reconciliation_records_kind_entity"
        ),
    )
    op.create_index(
        "idx_reconciliation_records_first_failed_at",
        "reconciliation_records",
        ["first_failed_at"],
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(
        "idx_reconciliation_records_first_failed_at", table_name="reconciliation_records"
    )
    op.drop_table("reconciliation_records")

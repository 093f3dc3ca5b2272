"""create Customer table

Revision ID: 3a7c1e9d2b40
Revises:
Create Date: 2026-10-17

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = "3a7c1e9d2b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    insp = inspect(bind)
    existing_tables = set(insp.get_table_names())

    def _has_index(table: str, name: str) -> bool:
        try:
            return any(ix.get("name") == name for ix in insp.get_indexes(table))
        except Exception:
            return False

    # The table usually pre-exists (owned upstream); only create when absent.
    if "Customer" not in existing_tables:
        op.create_table(
            "Customer",
            sa.Column("id", sa.String(length=64), primary_key=True, nullable=False),
            sa.Column("name", sa.String(length=255), nullable=False),
            sa.Column(
                "created_at",
                sa.DateTime(timezone=False),
                nullable=False,
                server_default=sa.func.current_timestamp(),
            ),
        )

    insp = inspect(op.get_bind())
    if not _has_index("Customer", "idx_customer_created_at"):
        op.create_index("idx_customer_created_at", "Customer", ["created_at"])


def downgrade() -> None:
    # Customer is owned upstream: only the index added here is removed.
    insp = inspect(op.get_bind())
    if "Customer" not in insp.get_table_names():
        return
    if any(ix.get("name") == "idx_customer_created_at" for ix in insp.get_indexes("Customer")):
        op.drop_index("idx_customer_created_at", table_name="Customer")

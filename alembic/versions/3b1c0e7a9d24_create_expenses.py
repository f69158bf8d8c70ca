"""create expenses

Revision ID: 3b1c0e7a9d24
Revises:
Create Date: 2026-10-18

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "3b1c0e7a9d24"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "expenses_expense",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("amount_minor_units", sa.BigInteger(), nullable=False),
        sa.Column("category", sa.String(length=50), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("idempotency_key", sa.String(length=200), nullable=False),
        sa.CheckConstraint("amount_minor_units > 0", name="ck_expense_amount_positive"),
    )
    op.create_index(
        "ix_expenses_expense_idempotency_key",
        "expenses_expense",
        ["idempotency_key"],
        unique=True,
    )
    op.create_index("ix_expenses_expense_date", "expenses_expense", ["date"])
    op.create_index(
        "ix_expenses_expense_category_date", "expenses_expense", ["category", "date"]
    )


def downgrade() -> None:
    op.drop_index("ix_expenses_expense_category_date", table_name="expenses_expense")
    op.drop_index("ix_expenses_expense_date", table_name="expenses_expense")
    op.drop_index("ix_expenses_expense_idempotency_key", table_name="expenses_expense")
    op.drop_table("expenses_expense")

from __future__ import annotations

import datetime

from sqlalchemy import BigInteger, CheckConstraint, Date, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from expense_tracker.core.models import Base, CreatedAt, UUIDPrimaryKey

CATEGORY_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 500
IDEMPOTENCY_KEY_MAX_LENGTH = 200


class Expense(UUIDPrimaryKey, CreatedAt, Base):
    __tablename__ = "expenses_expense"
    __table_args__ = (
        CheckConstraint("amount_minor_units > 0", name="ck_expense_amount_positive"),
        Index("ix_expenses_expense_category_date", "category", "date"),
    )

    amount_minor_units: Mapped[int] = mapped_column(BigInteger)
    category: Mapped[str] = mapped_column(String(CATEGORY_MAX_LENGTH))
    description: Mapped[str] = mapped_column(Text)
    date: Mapped[datetime.date] = mapped_column(Date, index=True)
    idempotency_key: Mapped[str] = mapped_column(
        String(IDEMPOTENCY_KEY_MAX_LENGTH), unique=True, index=True
    )

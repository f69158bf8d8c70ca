from __future__ import annotations

import uuid
import datetime

from pydantic import BaseModel, StrictInt


class ExpenseCreateIn(BaseModel):
    amount_minor_units: StrictInt
    category: str
    description: str
    date: str
    idempotency_key: str


class ExpenseOut(BaseModel):
    id: uuid.UUID
    amount_minor_units: int
    category: str
    description: str
    date: datetime.date
    idempotency_key: str
    created_at: datetime.datetime


class ExpenseSummaryOut(BaseModel):
    count: int
    total_minor_units: int
    total_display: str
    category_totals: dict[str, int] | None


class ExpenseListOut(BaseModel):
    items: list[ExpenseOut]
    summary: ExpenseSummaryOut


class CategoriesOut(BaseModel):
    categories: list[str]
    all_sentinel: str

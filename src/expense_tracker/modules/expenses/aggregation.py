from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from expense_tracker.modules.expenses.models import Expense


@dataclass(frozen=True)
class ExpenseSummary:
    count: int
    total_minor_units: int
    category_totals: dict[str, int] | None


def total_minor_units(expenses: Iterable[Expense]) -> int:
    return sum(e.amount_minor_units for e in expenses)


def category_totals(expenses: Iterable[Expense]) -> dict[str, int]:
    totals: dict[str, int] = {}
    for e in expenses:
        totals[e.category] = totals.get(e.category, 0) + e.amount_minor_units
    return totals


def summarize(expenses: Iterable[Expense], *, filtered: bool) -> ExpenseSummary:
    """Totals for a List result.

    Per-category subtotals only make sense over the unfiltered set, so they
    are left as None when a category filter produced `expenses`.
    """
    items = list(expenses)
    return ExpenseSummary(
        count=len(items),
        total_minor_units=total_minor_units(items),
        category_totals=None if filtered else category_totals(items),
    )

from __future__ import annotations

from expense_tracker.modules.expenses.aggregation import (
    category_totals,
    summarize,
    total_minor_units,
)
from expense_tracker.modules.expenses.models import Expense


def _expense(amount: int, category: str) -> Expense:
    return Expense(
        amount_minor_units=amount,
        category=category,
        description="x",
        idempotency_key=f"{category}-{amount}",
    )


def test_total_sums_minor_units():
    expenses = [_expense(1000, "Food"), _expense(2500, "Transport"), _expense(750, "Food")]
    assert total_minor_units(expenses) == 4250


def test_category_subtotal_only_counts_matching_records():
    expenses = [_expense(1000, "Food"), _expense(2500, "Transport"), _expense(750, "Food")]
    assert category_totals(expenses) == {"Food": 1750, "Transport": 2500}


def test_summary_omits_category_totals_when_filtered():
    expenses = [_expense(1000, "Food"), _expense(750, "Food")]

    filtered = summarize(expenses, filtered=True)
    assert filtered.count == 2
    assert filtered.total_minor_units == 1750
    assert filtered.category_totals is None

    unfiltered = summarize(expenses, filtered=False)
    assert unfiltered.category_totals == {"Food": 1750}


def test_empty_summary():
    summary = summarize([], filtered=False)
    assert summary.count == 0
    assert summary.total_minor_units == 0
    assert summary.category_totals == {}

from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy import func, select

from expense_tracker.core.db import SessionLocal
from expense_tracker.core.errors import ValidationError
from expense_tracker.modules.expenses import service as expense_service
from expense_tracker.modules.expenses.models import Expense
from expense_tracker.modules.expenses.service import create_expense, validate_expense_input

VALID = {
    "amount_minor_units": 1050,
    "category": "Food",
    "description": "Lunch",
    "date": "2024-05-01",
    "idempotency_key": "k1",
}


def test_negative_amount_is_rejected_and_nothing_persisted():
    with SessionLocal() as session:
        with pytest.raises(ValidationError) as exc:
            create_expense(session, **{**VALID, "amount_minor_units": -5})
        assert exc.value.field == "amount_minor_units"
        assert session.scalar(select(func.count()).select_from(Expense)) == 0


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("amount_minor_units", 0),
        ("amount_minor_units", True),
        ("amount_minor_units", 10.5),
        ("amount_minor_units", "1050"),
        ("category", ""),
        ("category", "   "),
        ("description", ""),
        ("description", None),
        ("idempotency_key", ""),
        ("date", ""),
        ("date", "2024-5-1"),
        ("date", "01/05/2024"),
        ("date", "2024-02-30"),
    ],
)
def test_invalid_input_fails_before_store_access(field, value):
    # No session: any store access would raise AttributeError instead.
    with pytest.raises(ValidationError) as exc:
        create_expense(None, **{**VALID, field: value})
    assert exc.value.field == field


def test_unknown_category_rejected_when_enumeration_enforced():
    with pytest.raises(ValidationError) as exc:
        validate_expense_input(**{**VALID, "category": "Groceries"})
    assert exc.value.field == "category"


def test_open_categories_when_enforcement_disabled(monkeypatch):
    monkeypatch.setattr(expense_service.settings, "enforce_categories", False)

    with SessionLocal() as session:
        expense, created = create_expense(session, **{**VALID, "category": "Groceries"})
        assert created is True
        assert expense.category == "Groceries"


def test_business_strings_are_trimmed_and_date_parsed():
    data = validate_expense_input(
        **{
            **VALID,
            "category": " Food ",
            "description": "  Lunch with team ",
        }
    )
    assert data.category == "Food"
    assert data.description == "Lunch with team"
    assert data.date == date(2024, 5, 1)


def test_date_objects_accepted():
    data = validate_expense_input(**{**VALID, "date": date(2024, 2, 29)})
    assert data.date == date(2024, 2, 29)


def test_overlong_description_rejected():
    with pytest.raises(ValidationError) as exc:
        validate_expense_input(**{**VALID, "description": "x" * 501})
    assert exc.value.field == "description"


def test_blank_idempotency_key_rejected():
    with pytest.raises(ValidationError) as exc:
        validate_expense_input(**{**VALID, "idempotency_key": "   "})
    assert exc.value.field == "idempotency_key"


def test_idempotency_key_kept_as_sent():
    data = validate_expense_input(**{**VALID, "idempotency_key": " k1 "})
    assert data.idempotency_key == " k1 "

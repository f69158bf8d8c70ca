from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from expense_tracker.core.config import settings
from expense_tracker.core.db import db_session
from expense_tracker.core.money import format_minor_units
from expense_tracker.modules.expenses.aggregation import summarize
from expense_tracker.modules.expenses.schemas import (
    CategoriesOut,
    ExpenseCreateIn,
    ExpenseListOut,
    ExpenseOut,
    ExpenseSummaryOut,
)
from expense_tracker.modules.expenses.service import (
    create_expense,
    get_expense,
    is_unfiltered,
    list_categories,
    list_expenses,
)

router = APIRouter(tags=["expenses"])


@router.get("/expenses", response_model=ExpenseListOut)
def list_expenses_endpoint(
    category: str | None = Query(default=None),
    session: Session = Depends(db_session),
) -> ExpenseListOut:
    expenses = list_expenses(session, category=category)
    summary = summarize(expenses, filtered=not is_unfiltered(category))
    return ExpenseListOut(
        items=[ExpenseOut.model_validate(e, from_attributes=True) for e in expenses],
        summary=ExpenseSummaryOut(
            count=summary.count,
            total_minor_units=summary.total_minor_units,
            total_display=format_minor_units(
                summary.total_minor_units,
                currency=settings.currency_code,
                digits=settings.currency_minor_digits,
            ),
            category_totals=summary.category_totals,
        ),
    )


@router.post("/expenses", response_model=ExpenseOut, status_code=status.HTTP_201_CREATED)
def create_expense_endpoint(
    payload: ExpenseCreateIn,
    response: Response,
    session: Session = Depends(db_session),
) -> ExpenseOut:
    expense, created = create_expense(session, **payload.model_dump())
    if not created:
        response.status_code = status.HTTP_200_OK
    response.headers["Idempotent-Replayed"] = "false" if created else "true"
    return ExpenseOut.model_validate(expense, from_attributes=True)


@router.get("/expenses/{expense_id}", response_model=ExpenseOut)
def get_expense_endpoint(
    expense_id: uuid.UUID,
    session: Session = Depends(db_session),
) -> ExpenseOut:
    expense = get_expense(session, expense_id=expense_id)
    if not expense:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Expense not found")
    return ExpenseOut.model_validate(expense, from_attributes=True)


@router.get("/categories", response_model=CategoriesOut)
def list_categories_endpoint() -> CategoriesOut:
    return CategoriesOut(
        categories=list_categories(), all_sentinel=settings.all_categories_sentinel
    )

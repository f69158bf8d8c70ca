from __future__ import annotations

import datetime
import logging
import re
import time
import uuid
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError
from sqlalchemy.orm import Session

from expense_tracker.core.config import settings
from expense_tracker.core.errors import (
    StoreIntegrityError,
    StoreUnavailableError,
    ValidationError,
)
from expense_tracker.core.logging import get_logger, log_event, monotonic_ms
from expense_tracker.modules.expenses.models import (
    CATEGORY_MAX_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    IDEMPOTENCY_KEY_MAX_LENGTH,
    Expense,
)

logger = get_logger(__name__)

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass(frozen=True)
class ExpenseInput:
    amount_minor_units: int
    category: str
    description: str
    date: datetime.date
    idempotency_key: str


def list_categories() -> list[str]:
    return list(settings.expense_categories)


def validate_expense_input(
    *,
    amount_minor_units: object,
    category: object,
    description: object,
    date: object,
    idempotency_key: object,
) -> ExpenseInput:
    # bool is an int subclass; True must not pass as one paisa.
    if isinstance(amount_minor_units, bool) or not isinstance(amount_minor_units, int):
        raise ValidationError(
            "amount_minor_units must be an integer", field="amount_minor_units"
        )
    if amount_minor_units <= 0:
        raise ValidationError(
            "amount_minor_units must be greater than zero", field="amount_minor_units"
        )

    clean_category = _required_text(category, field="category", max_length=CATEGORY_MAX_LENGTH)
    if settings.enforce_categories and clean_category not in settings.expense_categories:
        raise ValidationError(
            f"Unknown category {clean_category!r}; expected one of "
            + ", ".join(settings.expense_categories),
            field="category",
        )
    clean_description = _required_text(
        description, field="description", max_length=DESCRIPTION_MAX_LENGTH
    )
    clean_key = _required_key(idempotency_key)

    return ExpenseInput(
        amount_minor_units=amount_minor_units,
        category=clean_category,
        description=clean_description,
        date=parse_expense_date(date),
        idempotency_key=clean_key,
    )


def _required_key(value: object) -> str:
    # Keys are opaque client tokens: matched byte for byte, never trimmed.
    if not isinstance(value, str):
        raise ValidationError("idempotency_key must be a string", field="idempotency_key")
    if not value.strip():
        raise ValidationError("idempotency_key is required", field="idempotency_key")
    if len(value) > IDEMPOTENCY_KEY_MAX_LENGTH:
        raise ValidationError(
            f"idempotency_key must be at most {IDEMPOTENCY_KEY_MAX_LENGTH} characters",
            field="idempotency_key",
        )
    return value


def parse_expense_date(value: object) -> datetime.date:
    if isinstance(value, datetime.datetime):
        raise ValidationError("date must be a calendar date without time", field="date")
    if isinstance(value, datetime.date):
        return value
    raw = _required_text(value, field="date", max_length=10)
    if not _DATE_RE.match(raw):
        raise ValidationError("date must be formatted as YYYY-MM-DD", field="date")
    try:
        return datetime.date.fromisoformat(raw)
    except ValueError as e:
        raise ValidationError(f"date {raw!r} is not a valid calendar date", field="date") from e


def _required_text(value: object, *, field: str, max_length: int) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string", field=field)
    clean = value.strip()
    if not clean:
        raise ValidationError(f"{field} is required", field=field)
    if len(clean) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters", field=field)
    return clean


def is_unfiltered(category: str | None) -> bool:
    return not category or category == settings.all_categories_sentinel


def list_expenses(session: Session, *, category: str | None = None) -> list[Expense]:
    """Return every expense, newest calendar date first.

    `category` restricts the result to an exact match; None, "" or the
    "All" sentinel disables filtering. Same-day records are ordered by
    insertion time, newest first, with the id as a final tie-break so the
    order is fully deterministic for a given snapshot.
    """
    stmt = select(Expense)
    if not is_unfiltered(category):
        stmt = stmt.where(Expense.category == category)
    stmt = stmt.order_by(Expense.date.desc(), Expense.created_at.desc(), Expense.id.desc())

    try:
        expenses = list(session.scalars(stmt))
    except DBAPIError as e:
        session.rollback()
        log_event(logger, "expense.store_unavailable", level=logging.ERROR, operation="list")
        raise StoreUnavailableError("Expense store unavailable") from e

    log_event(
        logger,
        "expense.list",
        level=logging.DEBUG,
        category=None if is_unfiltered(category) else category,
        count=len(expenses),
    )
    return expenses


def get_expense(session: Session, *, expense_id: uuid.UUID) -> Expense | None:
    try:
        return session.scalar(select(Expense).where(Expense.id == expense_id))
    except DBAPIError as e:
        session.rollback()
        raise StoreUnavailableError("Expense store unavailable") from e


def create_expense(
    session: Session,
    *,
    amount_minor_units: int,
    category: str,
    description: str,
    date: datetime.date | str,
    idempotency_key: str,
) -> tuple[Expense, bool]:
    """Insert an expense unless one already carries `idempotency_key`.

    Returns (expense, created). A replayed key returns the stored record
    untouched; its business fields win over whatever the replay sent.
    """
    data = validate_expense_input(
        amount_minor_units=amount_minor_units,
        category=category,
        description=description,
        date=date,
        idempotency_key=idempotency_key,
    )

    start = time.monotonic()
    attempts = max(1, settings.store_max_attempts)
    attempt = 0
    while True:
        try:
            expense, action = _lookup_or_insert(session, data)
        except OperationalError as e:
            session.rollback()
            if attempt < attempts - 1:
                log_event(
                    logger,
                    "expense.store_retry",
                    level=logging.WARNING,
                    attempt=attempt + 1,
                    error=str(e.orig) if e.orig is not None else str(e),
                )
                time.sleep(settings.store_retry_backoff_seconds * (2**attempt))
                attempt += 1
                continue
            log_event(
                logger,
                "expense.store_unavailable",
                level=logging.ERROR,
                operation="create",
                attempts=attempts,
            )
            raise StoreUnavailableError("Expense store unavailable") from e
        except IntegrityError as e:
            session.rollback()
            raise StoreIntegrityError("Expense could not be stored") from e
        except DBAPIError as e:
            session.rollback()
            raise StoreUnavailableError("Expense store unavailable") from e

        log_event(
            logger,
            "expense.create",
            action=action,
            expense_id=str(expense.id),
            category=expense.category,
            attempts=attempt + 1,
            duration_ms=monotonic_ms(start),
        )
        return expense, action == "created"


def _lookup_or_insert(session: Session, data: ExpenseInput) -> tuple[Expense, str]:
    existing = _find_by_idempotency_key(session, data.idempotency_key)
    if existing:
        return existing, "existing"

    expense = Expense(
        amount_minor_units=data.amount_minor_units,
        category=data.category,
        description=data.description,
        date=data.date,
        idempotency_key=data.idempotency_key,
    )
    try:
        session.add(expense)
        session.commit()
    except IntegrityError:
        # Another writer inserted the same key between our lookup and insert.
        session.rollback()
        existing = _find_by_idempotency_key(session, data.idempotency_key)
        if not existing:
            raise
        return existing, "dedupe_conflict"

    session.refresh(expense)
    return expense, "created"


def _find_by_idempotency_key(session: Session, idempotency_key: str) -> Expense | None:
    return session.scalar(select(Expense).where(Expense.idempotency_key == idempotency_key))

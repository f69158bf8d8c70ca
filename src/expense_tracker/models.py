"""
Alembic model import hook.

Importing this module ensures all SQLAlchemy models are registered on Base.metadata.
"""

from __future__ import annotations

from expense_tracker.modules.expenses.models import Expense  # noqa: F401

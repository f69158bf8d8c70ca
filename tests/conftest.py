from __future__ import annotations

import os

import pytest

# Set env before any expense_tracker imports (settings/engine are created at import time).
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite:///./.expense_tracker_test.db")
os.environ.setdefault("STORE_MAX_ATTEMPTS", "5")
os.environ.setdefault("STORE_RETRY_BACKOFF_SECONDS", "0.01")


@pytest.fixture(autouse=True)
def _reset_db() -> None:
    import expense_tracker.models  # noqa: F401
    from expense_tracker.core.db import engine
    from expense_tracker.core.models import Base

    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)

    yield


from __future__ import annotations

from expense_tracker.core.config import settings
from expense_tracker.core.db import engine
from expense_tracker.core.logging import get_logger, log_event
from expense_tracker.core.models import Base

logger = get_logger(__name__)


def bootstrap() -> None:
    if settings.environment == "dev" and str(settings.database_url).startswith("sqlite"):
        import expense_tracker.models  # noqa: F401

        Base.metadata.create_all(engine)
        log_event(logger, "bootstrap.create_all", database_url=settings.database_url)

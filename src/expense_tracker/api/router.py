from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session

from expense_tracker.core.db import db_session
from expense_tracker.core.logging import get_logger, log_exception
from expense_tracker.modules.expenses.api import router as expenses_router

logger = get_logger(__name__)

router = APIRouter()

router.include_router(expenses_router, prefix="/api")


@router.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/healthz/db")
def healthz_db(session: Session = Depends(db_session)) -> JSONResponse:
    try:
        session.execute(text("SELECT 1"))
    except DBAPIError:
        log_exception(logger, "healthz.db.error")
        return JSONResponse(status_code=503, content={"status": "unavailable"})
    return JSONResponse(status_code=200, content={"status": "ok"})

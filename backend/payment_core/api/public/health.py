"""
Health check endpoints
"""

import logging
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import payment_core.core  # noqa: F401  (registers every table on Base.metadata)
from payment_core.infrastructure.database import Base, get_db
from payment_core.schemas.common import HealthResponse, ReadyResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Basic health check"""
    return HealthResponse(status="ok")


@router.get("/ready", response_model=ReadyResponse, responses={503: {"model": ReadyResponse}})
async def ready(db: Session = Depends(get_db)):
    """
    Readiness check

    Tables are not migrated by this service, so a reachable database
    without the accounts, payment_transactions and payment_audit_logs
    tables is reported as not ready.

    Returns:
    - 200 if the database is reachable and every table exists
    - 503 otherwise
    """
    report = ReadyResponse(status="ok", database="unknown")

    try:
        db.execute(text("SELECT 1"))
        report.database = "connected"
        inspector = inspect(db.get_bind())
        report.missing_tables = [
            name for name in sorted(Base.metadata.tables) if not inspector.has_table(name)
        ]
    except SQLAlchemyError as e:
        logger.warning(f"Readiness check failed: {e}")
        report.database = f"error: {e}"

    if report.database != "connected" or report.missing_tables:
        report.status = "not_ready"

    status_code = 200 if report.status == "ok" else 503
    return JSONResponse(status_code=status_code, content=report.model_dump())

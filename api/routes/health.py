"""Health check and utility routes"""

from fastapi import APIRouter, Request
from sqlalchemy import text
import logging

from api.responses import HealthResponse
from app.config import settings

router = APIRouter(tags=["Health"])
logger = logging.getLogger("macroplate.api.health")


@router.get("/health-check", response_model=HealthResponse)
def health_check():
    """Basic health check endpoint"""
    return HealthResponse(status="ok", service=settings.app_name, version=settings.app_version)


@router.get("/health-check/db")
def database_status(request: Request):
    """Report whether the recipe store answers a trivial query."""
    database = getattr(request.app.state, "database", None)
    if database is None:
        return {"database": "not configured"}
    try:
        with database.session() as db:
            db.execute(text("SELECT 1"))
        return {"database": "ok"}
    except Exception as e:
        logger.exception("Database health check failed")
        return {"database": "unavailable", "error": str(e)}

"""Health check routes"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_db
from api.responses import HealthResponse
from app.config import settings

router = APIRouter(tags=["Health"])
logger = logging.getLogger("honestmeals.api.health")


@router.get("/health-check")
def health_check():
    """Basic health check endpoint"""
    return {"status": "ok", "service": settings.app_name}


@router.get("/health-check/database", response_model=HealthResponse)
def database_health(db: Session = Depends(get_db)):
    """Run a trivial query against the configured database."""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"database_check_failed error={e}")
        body = HealthResponse(
            status="unavailable",
            service=settings.app_name,
            version=settings.app_version,
            database="unreachable",
        )
        return JSONResponse(status_code=503, content=body.model_dump())
    return HealthResponse(
        status="ok",
        service=settings.app_name,
        version=settings.app_version,
        database="ok",
    )

"""
Health check routes.
"""
from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..config import get_settings
from ..database import get_db
from ..logging_config import api_logger

settings = get_settings()

router = APIRouter(prefix="/health", tags=["health"])

VERSION = "1.0.0"
START_TIME = datetime.utcnow()


def get_uptime() -> str:
    """Get process uptime as human-readable string"""
    delta = datetime.utcnow() - START_TIME
    hours, remainder = divmod(delta.seconds, 3600)
    minutes, seconds = divmod(remainder, 60)

    if delta.days > 0:
        return f"{delta.days}d {hours}h {minutes}m"
    elif hours > 0:
        return f"{hours}h {minutes}m {seconds}s"
    else:
        return f"{minutes}m {seconds}s"


@router.get("")
def health_check():
    """Liveness marker for load balancers and monitoring."""
    return {
        "status": "healthy",
        "message": "Server is running",
        "environment": settings.environment,
        "version": VERSION,
        "uptime": get_uptime(),
    }


@router.get("/ready")
def readiness_check(db: Session = Depends(get_db)):
    """Report whether the database answers a trivial query."""
    try:
        db.execute(text("SELECT 1"))
        database = "healthy"
    except SQLAlchemyError as e:
        api_logger.error("Database health check failed", error=e)
        database = "unhealthy"
    return {
        "status": "healthy" if database == "healthy" else "degraded",
        "database": database,
    }

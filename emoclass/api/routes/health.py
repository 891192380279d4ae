'''
Liveness and database connectivity checks.
'''
import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session
from emoclass.db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

@router.get("/health")
def health():
    """
    Simple health check. Does not touch the database.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "message": "API is running",
        "service": "emoclass-api"
    }

@router.get("/health/full")
def health_full(db: Session = Depends(get_db)):
    """
    Verifies both API and database connectivity.
    """
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "unknown",
        "service": "emoclass-api"
    }

    try:
        db.execute(text("SELECT 1")).scalar()
        health_status["database"] = "connected"
    except Exception as e:
        logger.error("Database health check failed: %s", str(e))
        health_status["status"] = "unhealthy"
        health_status["database"] = "disconnected"

    return health_status

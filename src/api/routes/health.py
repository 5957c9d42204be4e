"""
Health check API route
"""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException

from database.connection import Database, DatabaseError, get_database

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check(db: Database = Depends(get_database)):
    """Health check - reports unhealthy only when the database is unreachable"""
    try:
        await db.ping()
    except DatabaseError as e:
        logger.warning(f"Health check failed: {e}")
        raise HTTPException(status_code=503, detail="Health check failed: database unavailable")

    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "connected"
    }

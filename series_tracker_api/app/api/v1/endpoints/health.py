"""
Health endpoint for API v1.

Reports whether the service is running and whether the SQLite database
answers a trivial query.  The route is public.
"""

import logging
import sqlite3
from typing import Dict

from fastapi import APIRouter

from series_tracker_api.app.core.db import get_connection

router = APIRouter()


@router.get("", response_model=Dict[str, str])
async def health() -> Dict[str, str]:
    """Return ``ok`` for the service and the database, or the database error."""
    response = {"status": "ok", "database": "ok"}
    try:
        conn = get_connection()
        try:
            conn.execute("SELECT 1").fetchone()
        finally:
            conn.close()
    except sqlite3.Error as e:
        logging.getLogger(__name__).warning("Database health check failed: %s", e)
        response["status"] = "degraded"
        response["database"] = str(e)
    return response

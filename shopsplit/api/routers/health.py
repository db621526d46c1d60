"""Health check endpoint."""

import logging
import sqlite3

from fastapi import APIRouter

from shopsplit.api.schemas.common import HealthResponse
from shopsplit.core.database import get_connection

router = APIRouter(prefix="/api", tags=["health"])
_LOGGER = logging.getLogger(__name__)


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Check API and database health.

    Returns "healthy" with the number of stored lists, or "offline" if the
    database cannot be queried.
    """
    try:
        with get_connection() as conn:
            list_count = conn.execute("SELECT COUNT(*) FROM shopping_lists").fetchone()[0]
    except sqlite3.Error as e:
        _LOGGER.warning("Health check: database unavailable: %s", e)
        return HealthResponse(status="offline", database_ok=False)

    return HealthResponse(status="healthy", database_ok=True, list_count=list_count)

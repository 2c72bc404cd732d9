"""Health check endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wasteland import __version__
from wasteland.core.logging import get_logger
from wasteland.db.database import get_db

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check(db: Session = Depends(get_db)) -> dict[str, str]:
    """Return service version and database reachability."""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error("Health check failed: %s", e)
        return {"status": "error", "database": "disconnected", "version": __version__}
    return {"status": "ok", "database": "connected", "version": __version__}

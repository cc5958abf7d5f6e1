import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.errors import DatabaseUnavailableError
from app.schemas.health import Health, Readiness, utc_timestamp

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=Health)
def health():
    return Health(status="ok", timestamp=utc_timestamp())


@router.get("/ready", response_model=Readiness)
def readiness(db: Session = Depends(get_db)):
    """Confirm the pool can hand out a working connection."""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("Readiness check failed: %s", e)
        raise DatabaseUnavailableError("Database is unavailable") from e
    return Readiness(status="ok", database="ok", timestamp=utc_timestamp())

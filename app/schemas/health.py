from datetime import datetime, timezone

from pydantic import BaseModel


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Health(BaseModel):
    status: str
    timestamp: str


class Readiness(Health):
    database: str

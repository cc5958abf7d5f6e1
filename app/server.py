"""Process entry point: check the database, then serve the API."""

import logging
import sys

import uvicorn

from app.core.config import settings
from app.db.base import check_connection

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def start_server() -> None:
    """Connect before listening; exit with status 1 if the database is unreachable."""
    configure_logging(settings.log_level)
    try:
        check_connection()
    except Exception as e:
        logger.error("Failed to start server: %s", e)
        sys.exit(1)

    logger.info("Kitchen4u API running on http://localhost:%s", settings.port)
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        server_header=False,
    )


def main() -> None:
    start_server()


if __name__ == "__main__":
    main()

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Mapping

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from app.core.config import Settings, settings

logger = logging.getLogger(__name__)

# Characters of the statement kept in the query log line
QUERY_LOG_PREVIEW = 50


@dataclass
class QueryResult:
    """Rows and row count returned by run_query."""

    rows: list[Mapping[str, Any]] = field(default_factory=list)
    row_count: int = 0


def build_engine(config: Settings) -> Engine:
    """
    Create the pooled engine for the configured database.

    PostgreSQL gets a fixed-size QueuePool with no overflow beyond db_pool_max
    and acquisition bounded by db_pool_connect_timeout. QueuePool has no idle
    reaper, so db_pool_idle_timeout is applied as pool_recycle: connections
    older than the timeout are replaced on checkout, busy ones included.
    SQLite (tests) keeps SQLAlchemy's default pool.
    """
    url = config.sqlalchemy_database_url
    if url.get_backend_name() == "sqlite":
        return create_engine(url, connect_args={"check_same_thread": False})

    return create_engine(
        url,
        pool_size=config.db_pool_max,
        max_overflow=0,
        pool_timeout=config.db_pool_connect_timeout,
        pool_recycle=config.db_pool_idle_timeout,
        pool_pre_ping=True,
        connect_args={"connect_timeout": config.db_pool_connect_timeout},
    )


engine = build_engine(settings)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def _version_statement(bind: Engine) -> str:
    if bind.dialect.name == "sqlite":
        return "SELECT sqlite_version()"
    return "SELECT version()"


def check_connection(bind: Engine | None = None) -> str:
    """
    Check out a pooled connection and report the server version.

    Driver errors are logged and re-raised unchanged.
    """
    bind = bind or engine
    try:
        with bind.connect() as connection:
            version = connection.execute(text(_version_statement(bind))).scalar_one()
    except Exception as e:
        logger.error("Database connection failed: %s", e)
        raise

    logger.info("PostgreSQL connected: %s", version)
    return version


def run_query(
    statement: str,
    params: Mapping[str, Any] | None = None,
    bind: Engine | None = None,
) -> QueryResult:
    """
    Execute a parameterized statement on a pooled connection.

    Args:
        statement: SQL text using :name placeholders
        params: Bound parameter values
        bind: Engine to use (defaults to the shared pool)

    Returns:
        QueryResult with the returned rows (empty for statements without a
        result set) and the driver's row count
    """
    bind = bind or engine
    start = time.perf_counter()
    try:
        with bind.begin() as connection:
            result = connection.execute(text(statement), params or {})
            rows = [dict(row) for row in result.mappings()] if result.returns_rows else []
            row_count = len(rows) if result.returns_rows else result.rowcount
    except Exception as e:
        logger.error("Query failed %s", {"text": statement[:QUERY_LOG_PREVIEW], "error": str(e)})
        raise
    duration = round((time.perf_counter() - start) * 1000, 2)

    if settings.db_log_queries:
        logger.debug(
            "Executed query %s",
            {"text": statement[:QUERY_LOG_PREVIEW], "duration": duration, "rows": row_count},
        )
    return QueryResult(rows=rows, row_count=row_count)


def dispose_engine() -> None:
    """Close every pooled connection."""
    engine.dispose()
    logger.info("Database pool disposed")

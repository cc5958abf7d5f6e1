"""Global exception handlers that map domain exceptions to HTTP responses."""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.errors import DATABASE_UNAVAILABLE, INTERNAL_ERROR, DatabaseUnavailableError
from app.schemas.error import ErrorResponse

logger = logging.getLogger(__name__)


def _error_response(status_code: int, detail: str, code: str) -> JSONResponse:
    """Return a standardized error response with detail and machine-readable code."""
    body = ErrorResponse(detail=detail, code=code)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def database_unavailable_error_handler(
    _request: Request, exc: DatabaseUnavailableError
) -> JSONResponse:
    return _error_response(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        str(exc),
        DATABASE_UNAVAILABLE,
    )


def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
        INTERNAL_ERROR,
    )


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """
    Turn uncaught exceptions into the INTERNAL_ERROR response.

    Installed innermost so the response still passes through CORS and the
    security headers; Starlette's own Exception handler sits outside both.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            return unhandled_error_handler(request, exc)


def register_exception_handlers(app):
    """Register domain exception handlers on the FastAPI app."""
    app.add_exception_handler(DatabaseUnavailableError, database_unavailable_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

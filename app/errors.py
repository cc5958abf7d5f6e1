"""Custom domain exceptions for the application."""

# Stable, machine-readable error codes for API consumers.
DATABASE_UNAVAILABLE = "DATABASE_UNAVAILABLE"
INTERNAL_ERROR = "INTERNAL_ERROR"


class DomainError(Exception):
    """Base exception for domain/business logic errors."""

    pass


class DatabaseUnavailableError(DomainError):
    """Raised when the connection pool cannot serve a working connection."""

    pass

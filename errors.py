"""Application exceptions.

Repositories report absence with ``None``/``False``/``[]`` and failure by
raising, so callers can tell the two apart.
"""


class ServeurApiError(Exception):
    """Base class for failures surfaced as a generic 500."""


class RepositoryError(ServeurApiError):
    """A database operation failed."""

    def __init__(self, operation: str, table: str, cause: Exception | None = None):
        self.operation = operation
        self.table = table
        self.cause = cause
        super().__init__(f"{operation} on {table} failed: {cause}")


class ExternalServiceError(ServeurApiError):
    """An outbound call to a companion service failed."""

    def __init__(self, service: str, detail: str):
        self.service = service
        self.detail = detail
        super().__init__(f"{service}: {detail}")


class ConflictError(Exception):
    """The request collides with an existing record."""

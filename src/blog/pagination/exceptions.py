"""Exceptions raised by the paginated query executor."""

from typing import Literal

from fastapi import status

from blog.common.app_error import AppError
from blog.config.errors import ErrorCode, ErrorNames

__all__ = [
    "CountQueryError",
    "FetchQueryError",
    "QueryConfigurationError",
    "QueryExecutionError",
]


QueryPhase = Literal["count", "fetch"]


class QueryExecutionError(AppError):
    """A listing query failed in the database.

    The original driver error is kept as ``__cause__``; ``phase`` names the step
    that failed so callers can tell a broken count from a broken page fetch.
    """

    error_code = ErrorCode.DATABASE_ERROR
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    phase: QueryPhase
    reason: str

    def __init__(self, phase: QueryPhase, reason: str, detail: object) -> None:
        """Initialize with the failed phase and the underlying error."""
        self.phase = phase
        self.reason = reason
        super().__init__(f"{reason}: {detail}")


class CountQueryError(QueryExecutionError):
    """Exception raised when the total row count could not be computed."""

    def __init__(self, detail: object) -> None:
        """Initialize with the underlying database error."""
        super().__init__("count", ErrorNames.COUNT_FAILED, detail)


class FetchQueryError(QueryExecutionError):
    """Exception raised when the requested page could not be loaded."""

    def __init__(self, detail: object) -> None:
        """Initialize with the underlying database error."""
        super().__init__("fetch", ErrorNames.FETCH_FAILED, detail)


class QueryConfigurationError(AppError):
    """Exception raised when a listing query cannot be issued at all."""

    error_code = ErrorCode.QUERY_CONFIGURATION_ERROR
    message = ErrorNames.CONNECTION_MISSING
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

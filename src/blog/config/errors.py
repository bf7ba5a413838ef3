"""Text constants for consistent error handling."""

from enum import StrEnum

__all__ = ["ErrorCode", "ErrorNames"]


class ErrorCode(StrEnum):
    """Error codes for standardized error handling."""

    # General errors
    SERVER_ERROR = "SERVER_ERROR"
    NOT_FOUND = "NOT_FOUND"

    # Query errors
    DATABASE_ERROR = "DATABASE_ERROR"
    QUERY_CONFIGURATION_ERROR = "QUERY_CONFIGURATION_ERROR"


class ErrorNames(StrEnum):
    """Error names for standardized error handling."""

    INTERNAL_SERVER_ERROR = "Internal server error"

    # Query phases
    COUNT_FAILED = "failed to count records"
    FETCH_FAILED = "failed to fetch records"
    CONNECTION_MISSING = "database connection not provided"

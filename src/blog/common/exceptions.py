"""Common exceptions."""

from fastapi import status

from blog.common.app_error import AppError
from blog.config.errors import ErrorCode

__all__ = ["NotFoundError"]


class NotFoundError(AppError):
    """Exception raised when something is not found."""

    error_code = ErrorCode.NOT_FOUND
    message = "Resource not found"
    status_code = status.HTTP_404_NOT_FOUND

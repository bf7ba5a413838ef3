"""Common module for shared error handling and routes.

Key Components:
- App errors: Application-specific error types with structured error codes
- HTTP exceptions: Not-found error shared by the domain modules
- Router: Root and health endpoints
"""

from .app_error import AppError
from .exceptions import NotFoundError

__all__ = ["AppError", "NotFoundError"]

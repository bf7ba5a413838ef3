"""User module."""

from .exceptions import UserNotFoundError
from .models import User, UserSummary
from .user_role import UserRole

__all__ = ["User", "UserNotFoundError", "UserRole", "UserSummary"]

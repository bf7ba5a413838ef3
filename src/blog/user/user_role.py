"""User role."""

from enum import StrEnum

__all__ = ["UserRole"]


class UserRole(StrEnum):
    """Role of a blog user."""

    ADMIN = "admin"
    AUTHOR = "author"
    READER = "reader"

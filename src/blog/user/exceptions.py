"""User exceptions."""

from blog.common.exceptions import NotFoundError

__all__ = ["UserNotFoundError"]


class UserNotFoundError(NotFoundError):
    """Exception raised when the user is not found."""

    def __init__(self, user_id: int) -> None:
        """Initialize with the user ID."""
        super().__init__(f"User with id {user_id} not found")

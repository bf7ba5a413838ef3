"""Post exceptions."""

from blog.common.exceptions import NotFoundError

__all__ = ["PostNotFoundError"]


class PostNotFoundError(NotFoundError):
    """Exception raised when the post is not found."""

    def __init__(self, post_id: int) -> None:
        """Initialize with the post ID."""
        super().__init__(f"Post with id {post_id} not found")

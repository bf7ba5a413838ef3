"""Post module."""

from .exceptions import PostNotFoundError
from .models import Post, PostSummary
from .post_status import PostStatus

__all__ = ["Post", "PostNotFoundError", "PostStatus", "PostSummary"]

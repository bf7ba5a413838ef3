"""Post status."""

from enum import StrEnum

__all__ = ["PostStatus"]


class PostStatus(StrEnum):
    """Publication state of a post."""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"

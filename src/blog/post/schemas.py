"""Post response schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from blog.common.relations import is_loaded
from blog.user.models import UserSummary

from .models import Post
from .post_status import PostStatus

__all__ = ["PostPublic"]


class PostPublic(BaseModel):
    """Post as returned by the API, with the author when included."""

    id: int = Field(description="Unique identifier for the post")
    title: str = Field(description="Title of the post")
    body: str = Field(description="Markdown body of the post")
    status: PostStatus = Field(description="Publication state of the post")
    author_id: int = Field(description="ID of the authoring user")
    created_at: datetime | None = Field(description="Timestamp of creation")
    updated_at: datetime | None = Field(description="Timestamp of the last update")
    author: UserSummary | None = Field(
        default=None, description="Author of the post, when included"
    )

    @classmethod
    def from_post(cls, post: Post) -> "PostPublic":
        """Build the response model without lazy loading relations."""
        author = None
        if is_loaded(post, "author") and post.author is not None:
            author = UserSummary.model_validate(post.author)

        return cls(
            id=post.id,  # type: ignore[arg-type]
            title=post.title,
            body=post.body,
            status=post.status,
            author_id=post.author_id,
            created_at=post.created_at,
            updated_at=post.updated_at,
            author=author,
        )

"""User response schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from blog.common.relations import is_loaded
from blog.post.models import PostSummary

from .models import User
from .user_role import UserRole

__all__ = ["UserPublic"]


class UserPublic(BaseModel):
    """User as returned by the API.

    ``posts`` is only present when the client asked for it through
    ``includes=posts``.
    """

    id: int = Field(description="Unique identifier for the user")
    name: str = Field(description="Display name of the user")
    email: str = Field(description="Email address of the user")
    role: UserRole = Field(description="Role of the user")
    created_at: datetime | None = Field(description="Timestamp of creation")
    updated_at: datetime | None = Field(description="Timestamp of the last update")
    posts: list[PostSummary] | None = Field(
        default=None, description="Posts written by the user, when included"
    )

    @classmethod
    def from_user(cls, user: User) -> "UserPublic":
        """Build the response model without lazy loading relations."""
        posts = None
        if is_loaded(user, "posts"):
            posts = [PostSummary.model_validate(post) for post in user.posts]

        return cls(
            id=user.id,  # type: ignore[arg-type]
            name=user.name,
            email=user.email,
            role=user.role,
            created_at=user.created_at,
            updated_at=user.updated_at,
            posts=posts,
        )

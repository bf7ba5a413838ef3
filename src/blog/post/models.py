"""Post models."""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import String
from sqlmodel import Column, DateTime, Field, Relationship, SQLModel, func

from .post_status import PostStatus

if TYPE_CHECKING:
    from blog.user.models import User

__all__ = ["Post", "PostSummary"]


class PostSummary(SQLModel):
    """Post fields embedded in other resources, for example in a user's posts."""

    id: int = Field(description="Unique identifier for the post")

    title: str = Field(description="Title of the post")

    status: PostStatus = Field(description="Publication state of the post")


class Post(SQLModel, table=True):
    """Post model."""

    __tablename__ = "posts"

    id: int | None = Field(
        default=None, primary_key=True, description="Unique identifier for the post."
    )

    title: str = Field(index=True, description="Title of the post.")

    body: str = Field(default="", description="Markdown body of the post.")

    status: PostStatus = Field(
        default=PostStatus.DRAFT,
        sa_column=Column(String(16), nullable=False, index=True),
        description="Publication state (draft, published or archived).",
    )

    author_id: int = Field(
        foreign_key="users.id", index=True, description="ID of the authoring user."
    )

    author: Optional["User"] = Relationship(back_populates="posts")

    created_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), insert_default=func.now()),
        description="Timestamp when the post was created.",
    )

    updated_at: datetime | None = Field(
        default=None,
        sa_column=Column(
            DateTime(timezone=True), onupdate=func.now(), insert_default=func.now()
        ),
        description="Timestamp when the post was last updated.",
    )

    deleted_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True, index=True),
        description="Timestamp when the post was soft deleted.",
    )

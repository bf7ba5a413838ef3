"""User models."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlmodel import Column, DateTime, Field, Relationship, SQLModel, func

from .user_role import UserRole

if TYPE_CHECKING:
    from blog.post.models import Post

__all__ = ["User", "UserSummary"]


class UserSummary(SQLModel):
    """User fields embedded in other resources, for example as a post author."""

    id: int = Field(description="Unique identifier for the user")

    name: str = Field(description="Display name of the user")

    role: UserRole = Field(description="Role of the user")


class User(SQLModel, table=True):
    """User model."""

    __tablename__ = "users"

    id: int | None = Field(
        default=None, primary_key=True, description="Unique identifier for the user."
    )

    name: str = Field(index=True, description="Display name of the user.")

    email: str = Field(index=True, unique=True, description="Email address.")

    role: UserRole = Field(
        default=UserRole.READER,
        sa_column=Column(String(16), nullable=False),
        description="Role of the user (admin, author or reader).",
    )

    posts: list["Post"] = Relationship(back_populates="author")

    created_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), insert_default=func.now()),
        description="Timestamp when the user was created.",
    )

    updated_at: datetime | None = Field(
        default=None,
        sa_column=Column(
            DateTime(timezone=True), onupdate=func.now(), insert_default=func.now()
        ),
        description="Timestamp when the user was last updated.",
    )

    deleted_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True, index=True),
        description="Timestamp when the user was soft deleted.",
    )

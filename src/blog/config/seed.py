"""Seed the database with initial data."""

from datetime import UTC, datetime, timedelta

from loguru import logger
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from blog.config.config import settings
from blog.post.models import Post
from blog.post.post_status import PostStatus
from blog.user.models import User
from blog.user.user_role import UserRole

__all__ = ["seed_db"]


SEED_EPOCH = datetime(2024, 1, 1, tzinfo=UTC)

USER_ADA_ID = 1
USER_GRACE_ID = 2
USER_ALAN_ID = 3
USER_DELETED_ID = 4

POST_DELETED_ID = 13

_TOPICS = ("Python", "SQL", "FastAPI", "Pagination", "Testing", "Logging")
_AUTHORS = (USER_ADA_ID, USER_GRACE_ID, USER_ALAN_ID)


async def seed_db(session: AsyncSession) -> None:
    """Seed the database with example users and posts.

    Creates three active users and one soft deleted user, twelve active posts
    spread over the active users and one soft deleted post. Every fourth post is
    a draft, the others are published.

    Args:
        session: The SQLModel async database session.
    """
    if not settings.clear_db_on_restart:
        result = await session.exec(select(User))
        if result.first() is not None:
            return

    session.add_all([
        User(
            id=USER_ADA_ID,
            name="Ada Lovelace",
            email="ada@example.com",
            role=UserRole.ADMIN,
            created_at=SEED_EPOCH,
        ),
        User(
            id=USER_GRACE_ID,
            name="Grace Hopper",
            email="grace@example.com",
            role=UserRole.AUTHOR,
            created_at=SEED_EPOCH + timedelta(days=1),
        ),
        User(
            id=USER_ALAN_ID,
            name="Alan Turing",
            email="alan@example.com",
            role=UserRole.AUTHOR,
            created_at=SEED_EPOCH + timedelta(days=2),
        ),
        User(
            id=USER_DELETED_ID,
            name="Removed Reader",
            email="removed@example.com",
            role=UserRole.READER,
            created_at=SEED_EPOCH + timedelta(days=3),
            deleted_at=SEED_EPOCH + timedelta(days=30),
        ),
    ])
    await session.flush()

    for number in range(1, POST_DELETED_ID):
        topic = _TOPICS[(number - 1) % len(_TOPICS)]
        session.add(
            Post(
                id=number,
                title=f"{topic} notes #{number}",
                body=f"Thoughts on {topic.lower()} from the field.",
                status=PostStatus.DRAFT if number % 4 == 0 else PostStatus.PUBLISHED,
                author_id=_AUTHORS[(number - 1) % len(_AUTHORS)],
                created_at=SEED_EPOCH + timedelta(days=number),
            )
        )

    session.add(
        Post(
            id=POST_DELETED_ID,
            title="Retracted post",
            body="This post was withdrawn.",
            status=PostStatus.ARCHIVED,
            author_id=USER_GRACE_ID,
            created_at=SEED_EPOCH + timedelta(days=POST_DELETED_ID),
            deleted_at=SEED_EPOCH + timedelta(days=60),
        )
    )

    await session.commit()
    logger.debug("Database seeded", users=4, posts=POST_DELETED_ID)

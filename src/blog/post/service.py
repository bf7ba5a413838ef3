"""Post service."""

from collections.abc import Mapping

from loguru import logger
from sqlmodel.ext.asyncio.session import AsyncSession

from blog.config.config import settings
from blog.pagination import PaginatedResponse
from blog.utils.listing import listing_options

from .post_status import PostStatus
from .query_builder import build_post_filter
from .repository import get_post_db, get_posts_paged_db
from .schemas import PostPublic

__all__ = ["get_post_svc", "get_posts_svc"]


async def get_posts_svc(
    db: AsyncSession,
    params: Mapping[str, str],
    status: PostStatus | None = None,
    author_id: int | None = None,
) -> PaginatedResponse[PostPublic]:
    """List posts page by page.

    Pagination and includes are bound from the raw query parameters; status and
    author become filter conditions on the listing.

    Args:
        db: Database session for persistence operations
        params: Raw query string of the request
        status: Only list posts in this state
        author_id: Only list posts written by this user

    Returns:
        Paginated response with the posts of the requested page.
    """
    post_filter = build_post_filter(params, status=status, author_id=author_id)
    posts, total = await get_posts_paged_db(db, post_filter, listing_options())

    logger.debug(
        "Posts listed",
        page=post_filter.pagination.page,
        total=total,
        filters=len(post_filter.filters),
    )
    return PaginatedResponse[PostPublic].from_query(
        items=[PostPublic.from_post(post) for post in posts],
        pagination=post_filter.get_pagination(),
        total=total,
        message="Posts retrieved",
    )


async def get_post_svc(db: AsyncSession, post_id: int) -> PostPublic:
    """Read a single post from the database."""
    post = await get_post_db(
        db, post_id, exclude_deleted=settings.enable_soft_delete
    )
    return PostPublic.from_post(post)

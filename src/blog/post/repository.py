"""Post repository."""

from loguru import logger
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from blog.pagination import (
    DynamicFilter,
    PaginatedQueryOptions,
    paginated_query_with_includable_and_options,
)

from .exceptions import PostNotFoundError
from .models import Post

__all__ = ["get_post_db", "get_posts_paged_db"]


async def get_posts_paged_db(
    db: AsyncSession, post_filter: DynamicFilter, options: PaginatedQueryOptions
) -> tuple[list[Post], int]:
    """Fetch a page of posts matching a request-bound filter.

    Args:
        db: The database session.
        post_filter: Filter carrying conditions, pagination and includes.
        options: Dialect and soft delete switches.

    Returns:
        tuple[list[Post], int]: The posts on the requested page and the total
        number of posts matching the filter.
    """
    posts, total = await paginated_query_with_includable_and_options(
        db, Post, post_filter, options
    )
    logger.debug("Posts retrieved", items_fetched=len(posts), total_items=total)
    return posts, total


async def get_post_db(
    db: AsyncSession, post_id: int, *, exclude_deleted: bool = True
) -> Post:
    """Retrieve a post by its ID.

    Raises:
        PostNotFoundError: If the post is not found.
    """
    statement = select(Post).where(Post.id == post_id)
    if exclude_deleted:
        statement = statement.where(col(Post.deleted_at).is_(None))

    result = await db.exec(statement)
    post = result.first()

    if post is None:
        raise PostNotFoundError(post_id)

    logger.debug("Post loaded from DB", post_id=post_id)
    return post

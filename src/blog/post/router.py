"""Post router."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from loguru import logger
from sqlmodel.ext.asyncio.session import AsyncSession

from blog.config.db import get_session
from blog.pagination import PaginatedResponse

from .post_status import PostStatus
from .schemas import PostPublic
from .service import get_post_svc, get_posts_svc

__all__ = ["router"]


router = APIRouter(tags=["Post"])


@router.get("", summary="Get all posts")
async def get_posts(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_session)],
    status: Annotated[PostStatus | None, Query(description="Filter by state")] = None,
    author_id: Annotated[
        int | None, Query(ge=1, description="Filter by author ID")
    ] = None,
) -> PaginatedResponse[PostPublic]:
    """Returns a paginated, searchable and sortable list of posts.

    Besides the filters below the endpoint reads ``page``, ``per_page``,
    ``search``, ``sort``, ``order`` and ``includes`` (only ``author``).

    Args:
        request: The HTTP request, its query string binds pagination.
        db: Database session.
        status: Only list posts in this state.
        author_id: Only list posts written by this user.

    Returns:
        PaginatedResponse: Posts of the requested page with page metadata.
    """
    response = await get_posts_svc(db, request.query_params, status, author_id)
    logger.debug(
        "Posts retrieved",
        page=response.pagination.page,
        per_page=response.pagination.per_page,
        total=response.pagination.total,
    )
    return response


@router.get("/{post_id}", summary="Get post by ID")
async def get_post(
    post_id: int, db: Annotated[AsyncSession, Depends(get_session)]
) -> PostPublic:
    """Retrieve a single post by its ID.

    Raises:
        PostNotFoundError: If no active post with that ID exists.
    """
    post = await get_post_svc(db, post_id)
    logger.debug("Post retrieved", post_id=post_id)
    return post

"""User router."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from loguru import logger
from sqlmodel.ext.asyncio.session import AsyncSession

from blog.config.db import get_session
from blog.pagination import PaginatedResponse, PaginationParams

from .schemas import UserPublic
from .service import get_user_svc, get_users_svc
from .user_role import UserRole

__all__ = ["router"]


router = APIRouter(tags=["User"])


@router.get("", summary="Get all users")
async def get_users(
    db: Annotated[AsyncSession, Depends(get_session)],
    pagination: PaginationParams,
    includes: Annotated[
        str | None, Query(description="Comma separated relations, e.g. posts")
    ] = None,
    role: Annotated[UserRole | None, Query(description="Filter by role")] = None,
) -> PaginatedResponse[UserPublic]:
    """Returns a paginated, searchable and sortable list of users.

    Pagination is read from ``page``, ``per_page``, ``search``, ``sort`` and
    ``order``. Invalid values fall back to their defaults.

    Args:
        db: Database session.
        pagination: Pagination bound from the query string.
        includes: Relations to embed, only ``posts`` is supported.
        role: Only list users with this role.

    Returns:
        PaginatedResponse: Users of the requested page with page metadata.
    """
    response = await get_users_svc(db, pagination, includes, role)
    logger.debug(
        "Users retrieved",
        page=response.pagination.page,
        per_page=response.pagination.per_page,
        total=response.pagination.total,
    )
    return response


@router.get("/{user_id}", summary="Get user by ID")
async def get_user(
    user_id: int, db: Annotated[AsyncSession, Depends(get_session)]
) -> UserPublic:
    """Retrieve a single user by its ID.

    Raises:
        UserNotFoundError: If no active user with that ID exists.
    """
    user = await get_user_svc(db, user_id)
    logger.debug("User retrieved", user_id=user_id)
    return user

"""User service."""

from loguru import logger
from sqlmodel.ext.asyncio.session import AsyncSession

from blog.config.config import settings
from blog.pagination import PaginatedResponse, PaginationRequest, parse_includes
from blog.utils.listing import listing_options

from .query_builder import UserQueryBuilder
from .repository import get_user_db, get_users_paged_db
from .schemas import UserPublic
from .user_role import UserRole

__all__ = ["get_user_svc", "get_users_svc"]


async def get_users_svc(
    db: AsyncSession,
    pagination: PaginationRequest,
    includes: str | None = None,
    role: UserRole | None = None,
) -> PaginatedResponse[UserPublic]:
    """List users page by page.

    Args:
        db: Database session for persistence operations
        pagination: Page window, search term and ordering
        includes: Comma separated relations to eager load
        role: Only list users with this role

    Returns:
        Paginated response with the users of the requested page.
    """
    options = listing_options()
    builder = UserQueryBuilder(role=role, dialect=options.dialect)

    users, total = await get_users_paged_db(
        db, builder, pagination, parse_includes(includes), options
    )

    logger.debug("Users listed", page=pagination.page, total=total, role=role)
    return PaginatedResponse[UserPublic].from_query(
        items=[UserPublic.from_user(user) for user in users],
        pagination=pagination,
        total=total,
        message="Users retrieved",
    )


async def get_user_svc(db: AsyncSession, user_id: int) -> UserPublic:
    """Read a single user from the database."""
    user = await get_user_db(
        db, user_id, exclude_deleted=settings.enable_soft_delete
    )
    return UserPublic.from_user(user)

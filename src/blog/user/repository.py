"""User repository."""

from collections.abc import Sequence

from loguru import logger
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from blog.pagination import (
    PaginatedQueryOptions,
    PaginationRequest,
    paginated_query_with_options,
)

from .exceptions import UserNotFoundError
from .models import User
from .query_builder import UserQueryBuilder

__all__ = ["get_user_db", "get_users_paged_db"]


async def get_users_paged_db(  # noqa: PLR0913, PLR0917
    db: AsyncSession,
    builder: UserQueryBuilder,
    pagination: PaginationRequest,
    includes: Sequence[str],
    options: PaginatedQueryOptions,
) -> tuple[list[User], int]:
    """Fetch a page of users from the database.

    Args:
        db: The database session.
        builder: Builder scoping the listing, for example to one role.
        pagination: Page window, search term and ordering.
        includes: Relations to eager load.
        options: Dialect and soft delete switches.

    Returns:
        tuple[list[User], int]: The users on the requested page and the total
        number of users matching the listing.
    """
    users, total = await paginated_query_with_options(
        db, User, builder, pagination, includes, options
    )
    logger.debug("Users retrieved", items_fetched=len(users), total_items=total)
    return users, total


async def get_user_db(
    db: AsyncSession, user_id: int, *, exclude_deleted: bool = True
) -> User:
    """Retrieve a user by its ID.

    Args:
        db: Database session instance.
        user_id: The ID of the user to retrieve.
        exclude_deleted: Treat soft deleted users as missing.

    Returns:
        User: The user with the given ID.

    Raises:
        UserNotFoundError: If the user is not found.
    """
    statement = select(User).where(User.id == user_id)
    if exclude_deleted:
        statement = statement.where(col(User.deleted_at).is_(None))

    result = await db.exec(statement)
    user = result.first()

    if user is None:
        raise UserNotFoundError(user_id)

    logger.debug("User loaded from DB", user_id=user_id)
    return user

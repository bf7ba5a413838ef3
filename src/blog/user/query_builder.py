"""Query builder for user listings."""

from sqlmodel import col

from blog.pagination import DatabaseDialect, SimpleQueryBuilder

from .models import User
from .user_role import UserRole

__all__ = ["UserQueryBuilder"]


_SEARCH_FIELDS = ["users.name", "users.email"]
_DEFAULT_SORT = "users.id asc"
_ALLOWED_INCLUDES = frozenset({"posts"})


class UserQueryBuilder(SimpleQueryBuilder):
    """User listing, optionally narrowed to a single role.

    Free text search matches name and email; only ``posts`` may be eager loaded.
    """

    def __init__(
        self,
        *,
        role: UserRole | None = None,
        dialect: DatabaseDialect = DatabaseDialect.MYSQL,
    ) -> None:
        """Initialize the builder for the ``users`` table."""
        super().__init__(
            User.__tablename__,  # type: ignore[arg-type]
            search_fields=_SEARCH_FIELDS,
            default_sort=_DEFAULT_SORT,
            dialect=dialect,
        )
        self.role = role
        if role is not None:
            self.with_filters(lambda stmt: stmt.where(col(User.role) == role.value))

    def get_allowed_includes(self) -> frozenset[str]:
        return _ALLOWED_INCLUDES

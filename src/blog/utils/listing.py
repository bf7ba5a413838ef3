"""Listing query options derived from the application settings."""

from blog.config.config import settings
from blog.pagination import DatabaseDialect, PaginatedQueryOptions

__all__ = ["listing_options"]


def listing_options() -> PaginatedQueryOptions:
    """Options for listings on the configured database.

    The search operator follows the backend of ``DATABASE_URL`` and soft deleted
    rows are hidden when ``enable_soft_delete`` is set.
    """
    return PaginatedQueryOptions(
        dialect=DatabaseDialect.from_url(settings.db_url),
        enable_soft_delete=settings.enable_soft_delete,
    )

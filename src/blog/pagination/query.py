"""Paginated listing queries: one count query, then one page query."""

from collections.abc import Sequence
from typing import Any

from loguru import logger
from pydantic import BaseModel
from sqlalchemy import ColumnElement, Select, func, inspect, literal_column, or_, select, text
from sqlalchemy.exc import NoInspectionAvailable, SQLAlchemyError
from sqlalchemy.orm import Load, selectinload
from sqlmodel.ext.asyncio.session import AsyncSession

from .dialect import DatabaseDialect, get_search_operator
from .exceptions import CountQueryError, FetchQueryError, QueryConfigurationError
from .metrics import LISTING_PAGE_SIZE, LISTING_QUERIES
from .query_builder import IncludableQueryBuilder, QueryBuilder, QueryLayerBuilder
from .schemas import PaginationRequest
from .validators import is_valid_sort_field, validate_includes

__all__ = [
    "PaginatedQueryOptions",
    "apply_auto_search",
    "build_count_query",
    "build_data_query",
    "paginated_query",
    "paginated_query_with_includable",
    "paginated_query_with_includable_and_options",
    "paginated_query_with_options",
]


class PaginatedQueryOptions(BaseModel):
    """Backend specific switches for a paginated query.

    Attributes:
        dialect: Backend used to pick the search operator.
        enable_soft_delete: Exclude rows whose ``deleted_at`` is set.
        custom_count_query: Raw SQL returning the total, replaces the count query.
    """

    dialect: DatabaseDialect = DatabaseDialect.MYSQL
    enable_soft_delete: bool = False
    custom_count_query: str | None = None


def apply_auto_search(
    stmt: Select[Any],
    search_term: str,
    search_fields: Sequence[str],
    dialect: DatabaseDialect,
) -> Select[Any]:
    """Restrict a statement to rows matching ``search_term`` in any search field.

    Args:
        stmt: Statement to narrow.
        search_term: Free text, matched as a ``%term%`` substring.
        search_fields: Columns declared searchable by the builder.
        dialect: Backend deciding between ``ILIKE`` and ``LIKE``.

    Returns:
        The statement with one OR-group predicate, or unchanged when there is
        nothing to search.
    """
    if not search_term or not search_fields:
        return stmt

    pattern = f"%{search_term}%"
    columns = [literal_column(field) for field in search_fields]
    if get_search_operator(dialect) == "ILIKE":
        conditions = [column.ilike(pattern) for column in columns]
    else:
        conditions = [column.like(pattern) for column in columns]
    return stmt.where(or_(*conditions))


def build_count_query(
    model: type[Any], builder: QueryBuilder, options: PaginatedQueryOptions
) -> Select[Any]:
    """Build the statement counting all rows of the listing.

    The page window and the free text search do not narrow the count.

    Args:
        model: Mapped class the listing returns.
        builder: Builder scoping the listing.
        options: Query switches.

    Returns:
        A ``SELECT count(*)`` statement over the filtered listing.
    """
    scoped = _scoped_query(model, builder, options)
    return select(func.count()).select_from(scoped.order_by(None).subquery())


def build_data_query(
    model: type[Any],
    builder: QueryBuilder,
    pagination: PaginationRequest,
    includes: Sequence[str],
    options: PaginatedQueryOptions,
) -> Select[Any]:
    """Build the statement loading one page of the listing.

    Args:
        model: Mapped class the listing returns.
        builder: Builder scoping the listing.
        pagination: Page window, search and ordering.
        includes: Relations to eager load, validated here.
        options: Query switches.

    Returns:
        The filtered, searched, sorted and windowed statement.
    """
    stmt = _scoped_query(model, builder, options)
    stmt = apply_auto_search(
        stmt, pagination.search, builder.get_search_fields(), options.dialect
    )

    if pagination.sort and is_valid_sort_field(pagination.sort):
        stmt = stmt.order_by(text(f"{pagination.sort} {_order(pagination)}"))
    else:
        if pagination.sort:
            logger.debug("Sort field rejected", sort=pagination.sort)
        stmt = stmt.order_by(text(builder.get_default_sort()))

    stmt = stmt.offset(pagination.get_offset()).limit(pagination.get_limit())

    loaders = [
        loader
        for include in validate_includes(builder, includes)
        if (loader := _eager_loader(model, include)) is not None
    ]
    if loaders:
        stmt = stmt.options(*loaders)

    return stmt


async def paginated_query[T](
    db: AsyncSession,
    model: type[T],
    builder: QueryBuilder,
    pagination: PaginationRequest,
    includes: Sequence[str] = (),
) -> tuple[list[T], int]:
    """Load one page of ``model`` rows with the MySQL defaults.

    See :func:`paginated_query_with_options`.
    """
    return await paginated_query_with_options(
        db, model, builder, pagination, includes, PaginatedQueryOptions()
    )


async def paginated_query_with_options[T](  # noqa: PLR0913, PLR0917
    db: AsyncSession,
    model: type[T],
    builder: QueryBuilder,
    pagination: PaginationRequest,
    includes: Sequence[str],
    options: PaginatedQueryOptions,
) -> tuple[list[T], int]:
    """Count the listing, then load the requested page of it.

    Both statements run one after the other on ``db``. Nothing is retried and
    no partial result is returned when either fails.

    Args:
        db: Session the queries are executed on.
        model: Mapped class the rows are materialized into.
        builder: Builder scoping, searching and sorting the listing.
        pagination: Page window, search term and ordering.
        includes: Relations to eager load.
        options: Dialect, soft delete and custom count switches.

    Returns:
        tuple[list[T], int]: The page of items and the total row count.

    Raises:
        CountQueryError: If counting failed; the page query is not issued.
        FetchQueryError: If loading the page failed.
    """
    table = builder.get_table_name()
    pagination.normalize()
    total = await _count(db, model, builder, options)

    stmt = build_data_query(model, builder, pagination, includes, options)
    try:
        result = await db.exec(stmt)
        items = _materialize(model, result.all())
    except SQLAlchemyError as e:
        logger.error("Listing fetch failed", table=table, error=str(e))
        LISTING_QUERIES.labels(table, "fetch_error").inc()
        raise FetchQueryError(e) from e

    LISTING_QUERIES.labels(table, "success").inc()
    LISTING_PAGE_SIZE.labels(table).observe(len(items))
    logger.debug(
        "Listing page loaded",
        table=table,
        page=pagination.page,
        per_page=pagination.get_limit(),
        items=len(items),
        total=total,
    )
    return items, total


async def paginated_query_with_includable[T](
    db: AsyncSession | None,
    model: type[T],
    builder: IncludableQueryBuilder,
) -> tuple[list[T], int]:
    """Run a listing whose pagination and includes live on the builder.

    Args:
        db: Session to use, or None to take it from the builder.
        model: Mapped class the rows are materialized into.
        builder: Request-bound builder.

    Returns:
        tuple[list[T], int]: The page of items and the total row count.

    Raises:
        QueryConfigurationError: If no session is given and the builder
            cannot provide one.
    """
    if db is None:
        if not isinstance(builder, QueryLayerBuilder):
            raise QueryConfigurationError
        db = builder.get_session()

    return await paginated_query_with_includable_and_options(
        db, model, builder, PaginatedQueryOptions()
    )


async def paginated_query_with_includable_and_options[T](
    db: AsyncSession,
    model: type[T],
    builder: IncludableQueryBuilder,
    options: PaginatedQueryOptions,
) -> tuple[list[T], int]:
    """Like :func:`paginated_query_with_includable` with explicit options."""
    builder.normalize()
    return await paginated_query_with_options(
        db,
        model,
        builder,
        builder.get_pagination(),
        builder.get_includes(),
        options,
    )


async def _count(
    db: AsyncSession,
    model: type[Any],
    builder: QueryBuilder,
    options: PaginatedQueryOptions,
) -> int:
    if options.custom_count_query:
        stmt: Any = text(options.custom_count_query)
    else:
        stmt = build_count_query(model, builder, options)

    try:
        total = await db.scalar(stmt)
    except SQLAlchemyError as e:
        logger.error("Listing count failed", table=builder.get_table_name(), error=str(e))
        LISTING_QUERIES.labels(builder.get_table_name(), "count_error").inc()
        raise CountQueryError(e) from e
    return int(total or 0)


def _scoped_query(
    model: type[Any], builder: QueryBuilder, options: PaginatedQueryOptions
) -> Select[Any]:
    stmt = builder.apply_filters(select(model))
    if options.enable_soft_delete:
        stmt = stmt.where(_not_deleted(builder.get_table_name()))
    return stmt


def _not_deleted(table_name: str) -> ColumnElement[bool]:
    column = f"{table_name}.deleted_at" if table_name else "deleted_at"
    return literal_column(column).is_(None)


def _order(pagination: PaginationRequest) -> str:
    return "desc" if pagination.order == "desc" else "asc"


def _eager_loader(model: type[Any], include: str) -> Load | None:
    """Translate a dotted relation path into a chain of ``selectinload``."""
    loader: Any = None
    current = model
    for name in include.split("."):
        try:
            relationship = inspect(current).relationships.get(name)
        except NoInspectionAvailable:
            relationship = None
        if relationship is None:
            logger.debug("Include dropped, unknown relation", include=include)
            return None
        attribute = getattr(current, name)
        loader = selectinload(attribute) if loader is None else loader.selectinload(attribute)
        current = relationship.mapper.class_
    return loader


def _materialize[T](model: type[T], rows: Sequence[Any]) -> list[T]:
    """Turn result rows into ``model`` instances.

    Entity selects yield the instances directly. Column selects (from a builder
    narrowing the SELECT list) are mapped by column name.
    """
    items: list[T] = []
    for row in rows:
        if len(row) == 1 and isinstance(row[0], model):
            items.append(row[0])
            continue
        values = {key.rsplit(".", 1)[-1]: value for key, value in row._mapping.items()}
        items.append(model(**values))
    return items

"""Query builders describing how a listing is scoped, searched and sorted."""

from collections.abc import Callable, Collection, Mapping
from typing import Any, Protocol, Self, runtime_checkable

from pydantic import BaseModel, Field
from sqlalchemy import FromClause, Select, literal_column, table, text
from sqlmodel.ext.asyncio.session import AsyncSession

from .dialect import DatabaseDialect, get_search_operator
from .schemas import PaginationRequest, bind_pagination

__all__ = [
    "DEFAULT_SORT",
    "AllowedIncludesProvider",
    "BaseFilter",
    "ChainableQueryBuilder",
    "FilterFunc",
    "IncludableQueryBuilder",
    "QueryBuilder",
    "QueryLayerBuilder",
    "SessionProvider",
    "SimpleQueryBuilder",
    "parse_includes",
]


DEFAULT_SORT = "id asc"

type FilterFunc = Callable[[Select[Any]], Select[Any]]


def parse_includes(raw: str | None) -> list[str]:
    """Split a comma separated ``includes`` parameter, trimming each entry."""
    if not raw:
        return []
    return [include.strip() for include in raw.split(",")]


@runtime_checkable
class QueryBuilder(Protocol):
    """Scope, search fields and default ordering of a listing."""

    def apply_filters(self, stmt: Select[Any]) -> Select[Any]: ...

    def get_table_name(self) -> str: ...

    def get_default_sort(self) -> str: ...

    def get_search_fields(self) -> list[str]: ...


@runtime_checkable
class IncludableQueryBuilder(QueryBuilder, Protocol):
    """Query builder that also carries the request's pagination and includes."""

    def get_includes(self) -> list[str]: ...

    def get_pagination(self) -> PaginationRequest: ...

    def normalize(self) -> None: ...


@runtime_checkable
class AllowedIncludesProvider(Protocol):
    """Builder restricting eager loading to a fixed set of relations."""

    def get_allowed_includes(self) -> Collection[str]: ...


@runtime_checkable
class SessionProvider(Protocol):
    """Builder able to hand out its own database session."""

    def get_session(self) -> AsyncSession: ...


@runtime_checkable
class QueryLayerBuilder(IncludableQueryBuilder, SessionProvider, Protocol):
    """Includable builder that brings its own session."""


class BaseFilter(BaseModel):
    """Pagination and include list shared by request-bound filters."""

    pagination: PaginationRequest = Field(default_factory=PaginationRequest)
    includes: list[str] = Field(default_factory=list)

    def bind(self, params: Mapping[str, str]) -> Self:
        """Read pagination and the comma separated ``includes`` parameter.

        Args:
            params: Raw query string values.

        Returns:
            The filter itself, for chaining.
        """
        self.pagination = bind_pagination(params)
        if includes := parse_includes(params.get("includes")):
            self.includes = includes
        return self

    def get_offset(self) -> int:
        return self.pagination.get_offset()

    def get_limit(self) -> int:
        return self.pagination.get_limit()

    def normalize(self) -> None:
        self.pagination.normalize()

    def get_pagination(self) -> PaginationRequest:
        return self.pagination

    def get_includes(self) -> list[str]:
        return self.includes


class SimpleQueryBuilder:
    """Query builder for a single table with an optional filter function."""

    def __init__(
        self,
        table_name: str,
        *,
        filter_func: FilterFunc | None = None,
        search_fields: list[str] | None = None,
        default_sort: str = DEFAULT_SORT,
        dialect: DatabaseDialect = DatabaseDialect.MYSQL,
    ) -> None:
        """Initialize the builder.

        Args:
            table_name: Table the listing reads from.
            filter_func: Callable narrowing the base statement.
            search_fields: Columns matched by the free text search.
            default_sort: ORDER BY expression used when no valid sort is given.
            dialect: Backend the search operator is chosen for.
        """
        self.table_name = table_name
        self.filter_func = filter_func
        self.search_fields = list(search_fields or [])
        self.default_sort = default_sort
        self.dialect = dialect

    def apply_filters(self, stmt: Select[Any]) -> Select[Any]:
        if self.filter_func is not None:
            return self.filter_func(stmt)
        return stmt

    def get_table_name(self) -> str:
        return self.table_name

    def get_default_sort(self) -> str:
        return self.default_sort or DEFAULT_SORT

    def get_search_fields(self) -> list[str]:
        return self.search_fields

    def get_search_operator(self) -> str:
        """Pattern-match operator for the builder's dialect."""
        return get_search_operator(self.dialect)

    def with_search_fields(self, *fields: str) -> Self:
        self.search_fields = list(fields)
        return self

    def with_default_sort(self, sort: str) -> Self:
        self.default_sort = sort
        return self

    def with_dialect(self, dialect: DatabaseDialect) -> Self:
        self.dialect = dialect
        return self

    def with_filters(self, filter_func: FilterFunc) -> Self:
        self.filter_func = filter_func
        return self


class ChainableQueryBuilder:
    """Builder adding select, join, group by and having clauses to a simple one.

    The wrapped :class:`SimpleQueryBuilder` runs first; the accumulated clauses
    are then applied in the order select, joins, group by, having.
    """

    def __init__(self, table_name: str, base: SimpleQueryBuilder | None = None) -> None:
        """Initialize the builder, wrapping ``base`` or a fresh simple builder."""
        self.base = base if base is not None else SimpleQueryBuilder(table_name)
        self._selects: list[str] = []
        self._joins: list[str] = []
        self._group_by: list[str] = []
        self._having: list[str] = []

    def select(self, *fields: str) -> Self:
        self._selects.extend(fields)
        return self

    def join(self, clause: str) -> Self:
        """Add a join written as ``JOIN <table> ON <condition>``."""
        self._joins.append(clause)
        return self

    def group_by(self, field: str) -> Self:
        self._group_by.append(field)
        return self

    def having(self, condition: str) -> Self:
        self._having.append(condition)
        return self

    def with_search_fields(self, *fields: str) -> Self:
        self.base.with_search_fields(*fields)
        return self

    def with_default_sort(self, sort: str) -> Self:
        self.base.with_default_sort(sort)
        return self

    def with_dialect(self, dialect: DatabaseDialect) -> Self:
        self.base.with_dialect(dialect)
        return self

    def with_filters(self, filter_func: FilterFunc) -> Self:
        self.base.with_filters(filter_func)
        return self

    def apply_filters(self, stmt: Select[Any]) -> Select[Any]:
        stmt = self.base.apply_filters(stmt)

        if self._selects:
            stmt = stmt.with_only_columns(
                *(literal_column(field) for field in self._selects),
                maintain_column_froms=True,
            )

        for clause in self._joins:
            stmt = _apply_join(stmt, clause)

        if self._group_by:
            stmt = stmt.group_by(*(literal_column(field) for field in self._group_by))

        for condition in self._having:
            stmt = stmt.having(text(condition))

        return stmt

    def get_table_name(self) -> str:
        return self.base.get_table_name()

    def get_default_sort(self) -> str:
        return self.base.get_default_sort()

    def get_search_fields(self) -> list[str]:
        return self.base.get_search_fields()

    def get_search_operator(self) -> str:
        return self.base.get_search_operator()


_JOIN_PREFIXES = {
    "LEFT OUTER JOIN ": True,
    "LEFT JOIN ": True,
    "INNER JOIN ": False,
    "JOIN ": False,
}


def _apply_join(stmt: Select[Any], clause: str) -> Select[Any]:
    """Attach a raw ``[LEFT|INNER] JOIN <table> [alias] ON <condition>`` clause."""
    upper = clause.upper()
    for prefix, is_outer in _JOIN_PREFIXES.items():
        if not upper.startswith(prefix):
            continue
        body = clause[len(prefix) :]
        on_at = body.upper().find(" ON ")
        if on_at < 0:
            break
        target, on_clause = body[:on_at].split(), body[on_at + 4 :].strip()
        ref: FromClause = table(target[0])
        if len(target) > 1:
            ref = ref.alias(target[-1])
        return stmt.join(ref, literal_column(on_clause), isouter=is_outer)
    raise ValueError(f"Unsupported join clause: {clause!r}")

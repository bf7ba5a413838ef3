# ruff: noqa: S101

"""Tests for the simple and chainable query builders."""

from typing import Any

import pytest
from sqlalchemy import Select, select
from sqlalchemy.dialects import sqlite
from sqlmodel import col

from blog.pagination import (
    DEFAULT_SORT,
    AllowedIncludesProvider,
    BaseFilter,
    ChainableQueryBuilder,
    DatabaseDialect,
    DynamicFilter,
    IncludableQueryBuilder,
    QueryBuilder,
    QueryLayerBuilder,
    SessionProvider,
    SimpleQueryBuilder,
    get_search_operator,
    parse_includes,
)
from blog.post.models import Post


def _sql(stmt: Select[Any]) -> str:
    compiled = stmt.compile(
        dialect=sqlite.dialect(), compile_kwargs={"literal_binds": True}
    )
    return " ".join(str(compiled).split())


@pytest.mark.pagination
@pytest.mark.pagination_builder
class TestSimpleQueryBuilder:
    """Tests for the single table builder."""

    @classmethod
    def test_defaults(cls) -> None:
        """A bare builder sorts by id and searches nothing."""
        builder = SimpleQueryBuilder("posts")

        assert builder.get_table_name() == "posts"
        assert builder.get_default_sort() == DEFAULT_SORT
        assert builder.get_search_fields() == []
        assert builder.get_search_operator() == "LIKE"

    @classmethod
    def test_empty_default_sort_falls_back(cls) -> None:
        """An empty default sort is replaced by ``id asc``."""
        assert SimpleQueryBuilder("posts", default_sort="").get_default_sort() == (
            "id asc"
        )

    @classmethod
    def test_fluent_configuration(cls) -> None:
        """The with_* methods configure and return the same builder."""
        builder = SimpleQueryBuilder("posts")

        chained = (
            builder.with_search_fields("title", "body")
            .with_default_sort("created_at desc")
            .with_dialect(DatabaseDialect.POSTGRESQL)
        )

        assert chained is builder
        assert builder.get_search_fields() == ["title", "body"]
        assert builder.get_default_sort() == "created_at desc"
        assert builder.get_search_operator() == "ILIKE"

    @classmethod
    def test_without_filter_returns_statement(cls) -> None:
        """No filter function leaves the statement untouched."""
        stmt = select(Post)

        assert SimpleQueryBuilder("posts").apply_filters(stmt) is stmt

    @classmethod
    def test_filter_function_is_applied(cls) -> None:
        """The filter function narrows the statement."""
        builder = SimpleQueryBuilder("posts").with_filters(
            lambda stmt: stmt.where(col(Post.status) == "published")
        )

        sql = _sql(builder.apply_filters(select(Post)))

        assert "WHERE posts.status = 'published'" in sql

    @classmethod
    def test_protocols(cls) -> None:
        """A simple builder is a query builder but carries no request state."""
        builder = SimpleQueryBuilder("posts")

        assert isinstance(builder, QueryBuilder)
        assert not isinstance(builder, IncludableQueryBuilder)
        assert not isinstance(builder, SessionProvider)


@pytest.mark.pagination
@pytest.mark.pagination_builder
class TestChainableQueryBuilder:
    """Tests for select, join, group by and having clauses."""

    @classmethod
    def test_clauses_are_applied(cls) -> None:
        """All accumulated clauses end up in the statement."""
        builder = (
            ChainableQueryBuilder("posts")
            .select("posts.author_id", "users.name")
            .join("LEFT JOIN users ON users.id = posts.author_id")
            .group_by("posts.author_id")
            .group_by("users.name")
            .having("COUNT(posts.id) > 1")
        )

        sql = _sql(builder.apply_filters(select(Post)))

        assert sql.startswith("SELECT posts.author_id, users.name FROM posts")
        assert "LEFT OUTER JOIN users ON users.id = posts.author_id" in sql
        assert "GROUP BY posts.author_id, users.name" in sql
        assert "HAVING COUNT(posts.id) > 1" in sql

    @classmethod
    def test_inner_join_with_alias(cls) -> None:
        """Inner joins may alias the joined table."""
        builder = ChainableQueryBuilder("posts").join(
            "INNER JOIN users u ON u.id = posts.author_id"
        )

        sql = _sql(builder.apply_filters(select(Post)))

        assert "JOIN users AS u ON u.id = posts.author_id" in sql
        assert "OUTER" not in sql

    @classmethod
    def test_unsupported_join(cls) -> None:
        """Joins that cannot be parsed are rejected."""
        builder = ChainableQueryBuilder("posts").join("CROSS JOIN users")

        with pytest.raises(ValueError, match="Unsupported join clause"):
            builder.apply_filters(select(Post))

    @classmethod
    def test_base_filter_runs_first(cls) -> None:
        """The wrapped simple builder's filter is kept."""
        builder = ChainableQueryBuilder("posts").with_filters(
            lambda stmt: stmt.where(col(Post.author_id) == 1)
        )

        sql = _sql(builder.apply_filters(select(Post)))

        assert "WHERE posts.author_id = 1" in sql

    @classmethod
    def test_delegates_to_base(cls) -> None:
        """Table, search fields, sort and operator come from the base builder."""
        base = SimpleQueryBuilder("posts", dialect=DatabaseDialect.POSTGRESQL)
        builder = (
            ChainableQueryBuilder("ignored", base)
            .with_search_fields("title")
            .with_default_sort("title asc")
        )

        assert builder.base is base
        assert builder.get_table_name() == "posts"
        assert builder.get_search_fields() == ["title"]
        assert builder.get_default_sort() == "title asc"
        assert builder.get_search_operator() == "ILIKE"
        assert isinstance(builder, QueryBuilder)


@pytest.mark.pagination
@pytest.mark.pagination_builder
class TestBaseFilter:
    """Tests for request binding of pagination and includes."""

    @classmethod
    def test_bind(cls) -> None:
        """Pagination and trimmed includes are read from the query string."""
        base_filter = BaseFilter().bind({
            "page": "2",
            "per_page": "5",
            "includes": " author , tags ",
        })

        assert base_filter.get_includes() == ["author", "tags"]
        assert base_filter.get_pagination().page == 2  # noqa: PLR2004
        assert base_filter.get_offset() == 5  # noqa: PLR2004
        assert base_filter.get_limit() == 5  # noqa: PLR2004

    @classmethod
    def test_bind_without_includes(cls) -> None:
        """A missing includes parameter leaves the list empty."""
        assert BaseFilter().bind({}).get_includes() == []

    @classmethod
    def test_parse_includes(cls) -> None:
        """Entries are split on commas and trimmed."""
        assert parse_includes("a, b.c ,d") == ["a", "b.c", "d"]
        assert parse_includes(None) == []
        assert parse_includes("") == []

    @classmethod
    def test_normalize(cls) -> None:
        """Normalizing the filter normalizes its pagination."""
        base_filter = BaseFilter()
        base_filter.pagination.per_page = 1000

        base_filter.normalize()

        assert base_filter.get_limit() == 100  # noqa: PLR2004

    @classmethod
    def test_dynamic_filter_protocols(cls) -> None:
        """Dynamic filters carry includes and may restrict them."""
        dynamic_filter = DynamicFilter()

        assert isinstance(dynamic_filter, IncludableQueryBuilder)
        assert isinstance(dynamic_filter, AllowedIncludesProvider)
        assert not isinstance(dynamic_filter, SessionProvider)
        assert not isinstance(dynamic_filter, QueryLayerBuilder)

    @classmethod
    def test_session_bound_filter_is_query_layer_builder(cls) -> None:
        """A dynamic filter with its own session satisfies the combined protocol."""

        class _BoundFilter(DynamicFilter):
            def get_session(self) -> Any:  # noqa: ANN401
                return None

        bound_filter = _BoundFilter()

        assert isinstance(bound_filter, SessionProvider)
        assert isinstance(bound_filter, QueryLayerBuilder)
        assert not isinstance(SimpleQueryBuilder("posts"), QueryLayerBuilder)


@pytest.mark.pagination
@pytest.mark.pagination_builder
class TestDatabaseDialect:
    """Tests for dialect detection and the search operator."""

    @classmethod
    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("postgresql+asyncpg://user@host/db", DatabaseDialect.POSTGRESQL),
            ("postgres://user@host/db", DatabaseDialect.POSTGRESQL),
            ("sqlite+aiosqlite:///app.db", DatabaseDialect.SQLITE),
            ("mysql+aiomysql://user@host/db", DatabaseDialect.MYSQL),
            ("mariadb://user@host/db", DatabaseDialect.MYSQL),
            ("mssql+pyodbc://user@host/db", DatabaseDialect.SQLSERVER),
            ("oracle://user@host/db", DatabaseDialect.MYSQL),
        ],
    )
    def test_from_url(cls, url: str, expected: DatabaseDialect) -> None:
        """The backend part of the URL picks the dialect, MySQL otherwise."""
        assert DatabaseDialect.from_url(url) == expected

    @classmethod
    def test_search_operator(cls) -> None:
        """Only Postgres matches case-insensitively with ILIKE."""
        assert get_search_operator(DatabaseDialect.POSTGRESQL) == "ILIKE"
        assert get_search_operator(DatabaseDialect.MYSQL) == "LIKE"
        assert get_search_operator(DatabaseDialect.SQLITE) == "LIKE"
        assert get_search_operator("postgresql") == "ILIKE"

# ruff: noqa: S101

"""Tests for pagination request binding and response metadata."""

import pytest
from starlette.requests import Request

from blog.pagination import (
    DEFAULT_PER_PAGE,
    MAX_PER_PAGE,
    PaginatedResponse,
    PaginationRequest,
    bind_pagination,
    calculate_pagination,
    pagination_params,
)


@pytest.mark.pagination
@pytest.mark.pagination_schemas
class TestBindPagination:
    """Tests for binding pagination from raw query parameters."""

    @classmethod
    def test_defaults(cls) -> None:
        """An empty query string yields the defaults."""
        pagination = bind_pagination({})

        assert pagination.page == 1
        assert pagination.per_page == DEFAULT_PER_PAGE
        assert not pagination.search
        assert not pagination.sort
        assert pagination.order == "asc"

    @classmethod
    def test_valid_values(cls) -> None:
        """Valid values are taken over unchanged."""
        pagination = bind_pagination({
            "page": "3",
            "per_page": "25",
            "search": "go",
            "sort": "created_at",
            "order": "desc",
        })

        assert pagination.page == 3  # noqa: PLR2004
        assert pagination.per_page == 25  # noqa: PLR2004
        assert pagination.search == "go"
        assert pagination.sort == "created_at"
        assert pagination.order == "desc"

    @classmethod
    @pytest.mark.parametrize("page", ["abc", "0", "-2", "", "1.5"])
    def test_invalid_page_keeps_default(cls, page: str) -> None:
        """Unparseable or non-positive pages fall back to the first page."""
        assert bind_pagination({"page": page}).page == 1

    @classmethod
    @pytest.mark.parametrize("per_page", ["0", "-1", "101", "1000", "ten"])
    def test_invalid_per_page_keeps_default(cls, per_page: str) -> None:
        """Page sizes outside 1..100 are ignored."""
        assert bind_pagination({"per_page": per_page}).per_page == DEFAULT_PER_PAGE

    @classmethod
    def test_max_per_page_is_accepted(cls) -> None:
        """The upper bound itself is a valid page size."""
        assert bind_pagination({"per_page": "100"}).per_page == MAX_PER_PAGE

    @classmethod
    @pytest.mark.parametrize("order", ["DESC", "Asc", "up", " desc"])
    def test_order_must_match_exactly(cls, order: str) -> None:
        """Only the exact strings asc and desc are accepted."""
        assert bind_pagination({"order": order}).order == "asc"

    @classmethod
    def test_dependency_reads_query_string(cls) -> None:
        """The FastAPI dependency binds from the request's query string."""
        request = Request({
            "type": "http",
            "method": "GET",
            "path": "/posts",
            "query_string": b"page=2&per_page=5&order=desc",
            "headers": [],
        })

        pagination = pagination_params(request)

        assert pagination.page == 2  # noqa: PLR2004
        assert pagination.per_page == 5  # noqa: PLR2004
        assert pagination.order == "desc"


@pytest.mark.pagination
@pytest.mark.pagination_schemas
class TestPaginationRequest:
    """Tests for the page window of a pagination request."""

    @classmethod
    def test_offset_and_limit(cls) -> None:
        """Offset skips all rows of the previous pages."""
        pagination = PaginationRequest(page=3, per_page=20)

        assert pagination.get_offset() == 40  # noqa: PLR2004
        assert pagination.get_limit() == 20  # noqa: PLR2004

    @classmethod
    def test_offset_coerces_page(cls) -> None:
        """A non-positive page is treated as the first page."""
        pagination = PaginationRequest(page=0, per_page=10)

        assert pagination.get_offset() == 0
        assert pagination.page == 1

    @classmethod
    def test_limit_coerces_per_page(cls) -> None:
        """A non-positive page size falls back to the default."""
        assert PaginationRequest(per_page=-5).get_limit() == DEFAULT_PER_PAGE

    @classmethod
    def test_normalize(cls) -> None:
        """Out of range values are coerced into range."""
        pagination = PaginationRequest(page=-1, per_page=500, order="up").normalize()

        assert pagination.page == 1
        assert pagination.per_page == MAX_PER_PAGE
        assert pagination.order == "asc"

    @classmethod
    def test_normalize_is_idempotent(cls) -> None:
        """Normalizing twice gives the same request as normalizing once."""
        once = PaginationRequest(page=0, per_page=0, order="sideways").normalize()
        snapshot = once.model_dump()

        assert once.normalize().model_dump() == snapshot


@pytest.mark.pagination
@pytest.mark.pagination_schemas
class TestPaginationResponse:
    """Tests for response metadata and the response envelope."""

    @classmethod
    @pytest.mark.parametrize(
        ("total", "per_page", "max_page"),
        [(25, 10, 3), (20, 10, 2), (0, 10, 1), (1, 100, 1), (101, 100, 2)],
    )
    def test_max_page(cls, total: int, per_page: int, max_page: int) -> None:
        """The last page rounds up and is never below one."""
        meta = calculate_pagination(PaginationRequest(per_page=per_page), total)

        assert meta.max_page == max_page
        assert meta.total == total
        assert meta.per_page == per_page

    @classmethod
    def test_envelope_success(cls) -> None:
        """Codes below 400 produce a success envelope."""
        response = PaginatedResponse[str].from_query(
            items=["a", "b"],
            pagination=PaginationRequest(page=2, per_page=2),
            total=5,
            message="ok",
        )

        assert response.code == 200  # noqa: PLR2004
        assert response.status == "success"
        assert list(response.data) == ["a", "b"]
        assert response.pagination.page == 2  # noqa: PLR2004
        assert response.pagination.max_page == 3  # noqa: PLR2004

    @classmethod
    def test_envelope_error(cls) -> None:
        """Codes of 400 and above produce an error envelope."""
        response = PaginatedResponse[int].from_query(
            items=[], pagination=PaginationRequest(), total=0, code=404
        )

        assert response.status == "error"
        assert response.pagination.max_page == 1

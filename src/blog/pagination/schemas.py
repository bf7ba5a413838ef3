"""Pagination request and response models."""

import math
from collections.abc import Mapping, Sequence
from typing import Annotated, Literal

from fastapi import Depends, Request
from pydantic import BaseModel, Field

__all__ = [
    "DEFAULT_PER_PAGE",
    "MAX_PER_PAGE",
    "PaginatedResponse",
    "PaginationParams",
    "PaginationRequest",
    "PaginationResponse",
    "bind_pagination",
    "calculate_pagination",
    "pagination_params",
]

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 10
MAX_PER_PAGE = 100
DEFAULT_ORDER: Literal["asc"] = "asc"
_ORDERS = frozenset({"asc", "desc"})


class PaginationRequest(BaseModel):
    """Page window, free text search and ordering requested by a client."""

    page: int = Field(default=DEFAULT_PAGE, description="Page number, starts at 1")
    per_page: int = Field(default=DEFAULT_PER_PAGE, description="Items per page")
    search: str = Field(default="", description="Free text matched against search fields")
    sort: str = Field(default="", description="Column to order by")
    order: str = Field(default=DEFAULT_ORDER, description="Sort direction, asc or desc")

    def get_offset(self) -> int:
        """Number of rows to skip for the current page."""
        if self.page <= 0:
            self.page = DEFAULT_PAGE
        return (self.page - 1) * self.get_limit()

    def get_limit(self) -> int:
        """Number of rows on one page."""
        if self.per_page <= 0:
            self.per_page = DEFAULT_PER_PAGE
        return self.per_page

    def normalize(self) -> "PaginationRequest":
        """Coerce out-of-range values to their defaults in place.

        Idempotent: normalizing twice yields the same request as once.

        Returns:
            The same request, for chaining.
        """
        if self.page <= 0:
            self.page = DEFAULT_PAGE
        if self.per_page <= 0:
            self.per_page = DEFAULT_PER_PAGE
        if self.per_page > MAX_PER_PAGE:
            self.per_page = MAX_PER_PAGE
        if self.order not in _ORDERS:
            self.order = DEFAULT_ORDER
        return self


class PaginationResponse(BaseModel):
    """Pagination metadata returned next to a page of items."""

    page: int
    per_page: int
    max_page: int
    total: int


class PaginatedResponse[T](BaseModel):
    """Response envelope for a page of items."""

    code: int
    status: Literal["success", "error"]
    message: str
    data: Sequence[T]
    pagination: PaginationResponse

    @classmethod
    def from_query(
        cls,
        *,
        items: Sequence[T],
        pagination: PaginationRequest,
        total: int,
        message: str = "",
        code: int = 200,
    ) -> "PaginatedResponse[T]":
        """Factory method to create a PaginatedResponse from query results."""
        return cls(
            code=code,
            status="error" if code >= 400 else "success",  # noqa: PLR2004
            message=message,
            data=items,
            pagination=calculate_pagination(pagination, total),
        )


def bind_pagination(params: Mapping[str, str]) -> PaginationRequest:
    """Build a pagination request from raw query parameters.

    Unparseable or out-of-range values never raise; the default is kept instead.

    Args:
        params: Query string values keyed by ``page``, ``per_page``, ``search``,
            ``sort`` and ``order``.

    Returns:
        PaginationRequest: A normalized request.
    """
    pagination = PaginationRequest()

    page = _parse_int(params.get("page"))
    if page is not None and page > 0:
        pagination.page = page

    per_page = _parse_int(params.get("per_page"))
    if per_page is not None and 0 < per_page <= MAX_PER_PAGE:
        pagination.per_page = per_page

    pagination.search = params.get("search") or ""
    pagination.sort = params.get("sort") or ""

    order = params.get("order")
    if order in _ORDERS:
        pagination.order = order

    return pagination.normalize()


def calculate_pagination(
    pagination: PaginationRequest, total_count: int
) -> PaginationResponse:
    """Compute page metadata for a total row count.

    Args:
        pagination: The request the page was loaded with.
        total_count: Number of rows matching the listing filters.

    Returns:
        PaginationResponse: Metadata with ``max_page`` of at least 1.
    """
    per_page = pagination.get_limit()
    max_page = max(1, math.ceil(total_count / per_page))
    return PaginationResponse(
        page=pagination.page,
        per_page=per_page,
        max_page=max_page,
        total=total_count,
    )


def _parse_int(raw: str | None) -> int | None:
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def pagination_params(request: Request) -> PaginationRequest:
    """FastAPI dependency binding pagination from the query string."""
    return bind_pagination(request.query_params)


PaginationParams = Annotated[PaginationRequest, Depends(pagination_params)]

"""Prometheus metrics for paginated listings."""

from prometheus_client import Counter, Histogram

__all__ = ["LISTING_PAGE_SIZE", "LISTING_QUERIES"]


LISTING_QUERIES = Counter(
    "blog_listing_queries_total",
    "Paginated listing queries by table and outcome",
    ["table", "outcome"],
)

LISTING_PAGE_SIZE = Histogram(
    "blog_listing_page_items",
    "Number of items returned per listing page",
    ["table"],
    buckets=(0, 1, 5, 10, 25, 50, 100),
)

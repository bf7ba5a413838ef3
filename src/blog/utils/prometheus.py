"""Prometheus metrics for in-flight HTTP requests."""

from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from prometheus_client import Gauge

REQUESTS_IN_PROGRESS = Gauge(
    "blog_http_requests_in_progress",
    "HTTP requests currently being served",
    ["method", "route"],
)


def add_prometheus_metrics(app: FastAPI) -> None:
    """Track in-flight requests per method and route template.

    The route template (``/posts/{post_id}``) is used instead of the raw path so
    the label set stays bounded.

    Args:
        app: The FastAPI application instance where the middleware will be added.
    """

    @app.middleware("http")
    async def track_in_flight(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        gauge = REQUESTS_IN_PROGRESS.labels(request.method, _route_template(request))
        gauge.inc()
        try:
            return await call_next(request)
        finally:
            gauge.dec()


def _route_template(request: Request) -> str:
    for route in request.app.routes:
        match, _ = route.matches(request.scope)
        if match.name == "FULL":
            return getattr(route, "path", request.url.path)
    return "unmatched"

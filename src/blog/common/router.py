"""Common router."""

from fastapi import APIRouter, Response

from blog.config.config import settings

__all__ = ["router"]


router = APIRouter(tags=["Common", "Health"])


@router.get("/", include_in_schema=False, summary="Service information")
async def root() -> dict[str, str]:
    """Report service name and running version."""
    return {"service": "blog", "version": settings.version}


@router.get("/health", include_in_schema=False, summary="Health check endpoint")
async def health() -> Response:
    """Liveness probe, answers 204 without touching the database."""
    return Response(status_code=204)

"""Router Initializer."""

from fastapi import FastAPI

from blog.common.router import router as common_router
from blog.post.router import router as post_router
from blog.user.router import router as user_router


def register_routers(app: FastAPI) -> None:
    """Register all API routers with the FastAPI application.

    Args:
        app: FastAPI application instance.
    """
    app.include_router(common_router)
    app.include_router(user_router, prefix="/users")
    app.include_router(post_router, prefix="/posts")

"""Database engine and session management."""

from collections.abc import AsyncGenerator
from typing import Any, Final

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlmodel.ext.asyncio.session import AsyncSession

from .config import settings

__all__ = ["engine", "get_session"]


def _engine_options() -> dict[str, Any]:
    options: dict[str, Any] = {
        "echo": settings.db_logging,
        "future": settings.db_future,
        "pool_pre_ping": settings.db_pool_pre_ping,
    }
    # SQLite runs on a single-file pool, the sizing knobs only apply to servers.
    if settings.db_url.startswith("sqlite"):
        options["connect_args"] = {
            "check_same_thread": False,
            "timeout": settings.db_timeout,
        }
    else:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_recycle=settings.db_pool_recycle,
        )
    return options


engine: Final[AsyncEngine] = create_async_engine(settings.db_url, **_engine_options())


async def get_session() -> AsyncGenerator[AsyncSession]:
    """Yield a database session bound to the application engine.

    Yields:
        AsyncSession: Session closed once the request completes.
    """
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session

"""Global exception handlers for Application."""

from asyncio import CancelledError

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from loguru import logger

from blog.common.app_error import AppError
from blog.config.config import settings
from blog.config.errors import ErrorCode, ErrorNames
from blog.pagination.exceptions import QueryExecutionError

from .error_path import get_error_path

__all__ = ["register_exception_handlers"]


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all global exception handlers to the FastAPI application.

    Registers handlers for:
    - Application errors (AppError)
    - Failed listing queries (QueryExecutionError)
    - Unexpected exceptions (ServerError)

    Args:
        app: The FastAPI application instance to register handlers with.
    """

    @app.exception_handler(AppError)
    def _handle_app_error(_request: Request, exc: AppError) -> JSONResponse:
        logger.debug("{}: {}", exc.error_code, exc.message, path=get_error_path(exc))
        return _make_response(exc.status_code, exc.error_code, exc.message)

    @app.exception_handler(QueryExecutionError)
    def _handle_query_error(
        _request: Request, exc: QueryExecutionError
    ) -> JSONResponse:
        """Log the driver error but answer with the failed phase only."""
        logger.error(
            "{}: {}",
            exc.error_code,
            exc.message,
            phase=exc.phase,
            path=get_error_path(exc),
        )
        return _make_response(exc.status_code, exc.error_code, exc.reason)

    @app.exception_handler(Exception)
    def _handle_unexpected(_request: Request, exc: Exception) -> JSONResponse:
        """Handle any uncaught exceptions as 500 server errors.

        Raises:
            CancelledError: Re-raised outside development.
        """
        if isinstance(exc, CancelledError) and settings.app_env != "development":
            raise exc

        logger.exception("{}", str(exc), path=get_error_path(exc))
        return _make_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorCode.SERVER_ERROR,
            ErrorNames.INTERNAL_SERVER_ERROR,
        )


def _make_response(status_code: int, code: ErrorCode, message: str) -> JSONResponse:
    """Create a standardized ``{"code", "message"}`` JSON error response."""
    return JSONResponse(
        status_code=status_code,
        content={"code": code, "message": message},
    )

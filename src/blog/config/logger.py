"""Logger configuration."""

import logging
import sys
from collections.abc import Mapping
from typing import Any

from loguru import logger
from loki_logger_handler.formatters.loguru_formatter import LoguruFormatter
from loki_logger_handler.loki_logger_handler import LokiLoggerHandler

from .config import settings

__all__ = ["InterceptHandler", "config_logger"]


_NOISY_MESSAGES = ("changes detected",)


def config_logger() -> None:
    """Route stdlib and application logging through Loguru.

    Development writes a rotating file next to a colored console sink. Production
    logs structured lines to stderr and ships records to Loki.
    """
    is_production = settings.app_env == "production"

    if is_production:
        _intercept_std_logging()

    logger.remove()

    if not is_production:
        logger.add(
            settings.log_path,
            rotation=settings.rotation,
            format=_development_format,
            enqueue=True,
            backtrace=False,
            diagnose=False,
            compression="zip",
            colorize=False,
            level=logging.DEBUG,
        )

    logger.add(
        sys.stderr if is_production else sys.stdout,
        format=_production_format if is_production else _development_format,
        level=settings.log_level,
        colorize=not is_production,
        enqueue=True,
        backtrace=not is_production,
        diagnose=not is_production,
        catch=not is_production,
    )

    if is_production and settings.loki_url:
        logger.add(
            LokiLoggerHandler(
                url=settings.loki_url,
                labels={
                    "application": "blog",
                    "environment": settings.app_env,
                    "version": settings.version,
                },
                timeout=5,
                enable_structured_loki_metadata=True,
                default_formatter=LoguruFormatter(),  # type: ignore[arg-type]
            ),
            serialize=True,
            enqueue=True,
            level=settings.log_level,
        )


def _intercept_std_logging() -> None:
    logging.root.handlers = [InterceptHandler()]
    logging.root.setLevel(settings.log_level)

    for name in logging.root.manager.loggerDict:
        std_logger = logging.getLogger(name)
        std_logger.handlers = []
        std_logger.propagate = True

    if settings.db_logging:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)


class InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        """Forward a stdlib log record to Loguru, keeping the caller's frame."""
        if not self.filter(record):
            return

        message = record.getMessage()
        if any(noise in message for noise in _NOISY_MESSAGES):
            return

        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_back and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, message)


def _production_format(record: Mapping[str, Any]) -> str:
    """Structured single-line format for production."""
    line = (
        f"{record['time'].strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]} | "
        f"{record['level']:<8} | "
        f"{record['name']}:{record['line']} - "
        "{message}"
    )

    if record["extra"]:
        extras = " | ".join(f"{k}={{extra[{k}]}}" for k in record["extra"])
        line += f" | {extras}"

    return line + "\n"


def _development_format(record: Mapping[str, Any]) -> str:
    """Colored format for development including call site and extras."""
    ts = record["time"].strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]

    line = (
        f"<green>{ts}</green> | "
        f"<level>{record['level']:<8}</level> | "
        f"<cyan>{record['name']}:{record['function']}:{record['line']}</cyan> - "
        "{message}"
    )

    if record["extra"]:
        extras = " | ".join(
            f"<yellow>{k}</yellow>=<cyan>{{extra[{k}]}}</cyan>" for k in record["extra"]
        )
        line += f" | {extras}"

    return line + "{exception}\n"

"""Configuration module for the blog application.

Key Components:
- settings: Application configuration loaded from environment variables and TOML files
- Database: Async SQLAlchemy engine and session dependency
- Logging: Loguru-based logging configuration with development/production modes
- Error handling: Centralized error codes and error messages

Database seeding lives in ``blog.config.seed`` and is imported by the application
lifespan directly, since it depends on the domain models.
"""

from blog.config.config import settings
from blog.config.db import engine, get_session
from blog.config.errors import ErrorCode, ErrorNames
from blog.config.logger import config_logger

__all__ = [
    "ErrorCode",
    "ErrorNames",
    "config_logger",
    "engine",
    "get_session",
    "settings",
]

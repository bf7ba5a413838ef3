"""SQL dialects supported by the listing helpers."""

from enum import StrEnum

__all__ = ["DatabaseDialect", "get_search_operator"]


class DatabaseDialect(StrEnum):
    """Database backend a listing query is rendered for."""

    MYSQL = "mysql"
    POSTGRESQL = "postgresql"
    SQLITE = "sqlite"
    SQLSERVER = "sqlserver"

    @classmethod
    def from_url(cls, url: str) -> "DatabaseDialect":
        """Derive the dialect from a SQLAlchemy database URL.

        Args:
            url: Connection URL such as ``postgresql+asyncpg://...``.

        Returns:
            The matching dialect, MySQL when the backend is not recognized.
        """
        backend = url.split("://", 1)[0].split("+", 1)[0].lower()
        return _URL_BACKENDS.get(backend, cls.MYSQL)


_URL_BACKENDS: dict[str, DatabaseDialect] = {
    "mysql": DatabaseDialect.MYSQL,
    "mariadb": DatabaseDialect.MYSQL,
    "postgres": DatabaseDialect.POSTGRESQL,
    "postgresql": DatabaseDialect.POSTGRESQL,
    "sqlite": DatabaseDialect.SQLITE,
    "mssql": DatabaseDialect.SQLSERVER,
}


def get_search_operator(dialect: DatabaseDialect | str) -> str:
    """Return the pattern-match operator used for free text search."""
    if dialect == DatabaseDialect.POSTGRESQL:
        return "ILIKE"
    return "LIKE"

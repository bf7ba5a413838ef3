"""Identifier checks guarding sort and include parameters.

Sort columns and include paths come straight from the query string and end up
in generated SQL, so they are checked here before the executor touches them.
"""

import re
from collections.abc import Iterable

from loguru import logger

__all__ = [
    "is_valid_identifier",
    "is_valid_include",
    "is_valid_sort_field",
    "validate_includes",
]


_IDENTIFIER = re.compile(r"[A-Za-z0-9_.]+")


def is_valid_identifier(value: str) -> bool:
    """Return True for a non-empty string of ASCII letters, digits, '_' or '.'."""
    return bool(value) and _IDENTIFIER.fullmatch(value) is not None


def is_valid_sort_field(field: str) -> bool:
    """Check whether a sort column can be interpolated into ORDER BY."""
    return is_valid_identifier(field)


def is_valid_include(include: str) -> bool:
    """Check whether a relation path can be used for eager loading."""
    return is_valid_identifier(include)


def validate_includes(builder: object, includes: Iterable[str]) -> list[str]:
    """Keep the includes a builder is willing to eager load.

    Syntax is always checked. When the builder exposes ``get_allowed_includes``
    the include must also be in that allow-set.

    Args:
        builder: Query builder, optionally providing an allow-set of relations.
        includes: Requested relation paths, in request order.

    Returns:
        The accepted includes, preserving order.
    """
    get_allowed = getattr(builder, "get_allowed_includes", None)
    allowed = get_allowed() if callable(get_allowed) else None

    valid: list[str] = []
    for include in includes:
        if not is_valid_include(include):
            logger.debug("Include rejected", include=include, reason="syntax")
            continue
        if allowed is not None and include not in allowed:
            logger.debug("Include rejected", include=include, reason="not allowed")
            continue
        valid.append(include)
    return valid

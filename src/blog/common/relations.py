"""Helpers for relations that may or may not have been eager loaded."""

from sqlalchemy import inspect
from sqlmodel import SQLModel

__all__ = ["is_loaded"]


def is_loaded(instance: SQLModel, relation: str) -> bool:
    """Check whether ``relation`` is populated without triggering a lazy load.

    Listings only load the relations a client asked for. Reading any other
    relation on an async session would issue blocking IO, so response models
    check this first.

    Args:
        instance: Persistent or detached ORM instance.
        relation: Relationship attribute name.

    Returns:
        True if the attribute was loaded, for example by ``selectinload``.
    """
    return relation not in inspect(instance).unloaded

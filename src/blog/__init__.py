"""Declaration of the root package blog."""

from blog.app import app
from blog.server import run

__all__ = ["app", "main"]


def main() -> None:
    """Run the application server."""
    run()

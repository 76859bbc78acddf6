"""API route handlers."""

from api.routes import health, files

__all__ = ["health", "files"]

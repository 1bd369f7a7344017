"""Route modules for the hastatus server."""

from .status_routes import register_status_routes

__all__ = [
    "register_status_routes",
]

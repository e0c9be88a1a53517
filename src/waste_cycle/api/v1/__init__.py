# src/waste_cycle/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import chat_router, listings_router, users_router

__all__ = [
    "chat_router",
    "listings_router",
    "users_router",
]

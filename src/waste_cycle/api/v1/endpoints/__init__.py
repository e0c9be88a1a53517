# src/waste_cycle/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .chat import router as chat_router
from .listings import router as listings_router
from .users import router as users_router

__all__ = [
    "chat_router",
    "listings_router",
    "users_router",
]

# src/waste_cycle/models/__init__.py
"""SQLAlchemy models for the waste-cycle application."""

from .chat import ChatMessage, ChatParticipant, ChatRoom
from .listing import Listing
from .user import User, UserRole

__all__ = [
    "ChatMessage", "ChatParticipant", "ChatRoom",
    "Listing",
    "User", "UserRole",
]

# src/waste_cycle/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .chat import ChatRoomCreate, MessageCreate, MessageView, RoomView
from .listing import ListingCreate, ListingResponse, ListingUpdate
from .user import ProfileResponse, ProfileUpdateRequest, RoleUpdateRequest

__all__ = [
    "ChatRoomCreate", "MessageCreate", "MessageView", "RoomView",
    "ListingCreate", "ListingResponse", "ListingUpdate",
    "ProfileResponse", "ProfileUpdateRequest", "RoleUpdateRequest",
]

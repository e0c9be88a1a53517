# src/waste_cycle/services/__init__.py
"""Business logic services for the waste-cycle application."""

from .chat_messages import MessageService
from .chat_rooms import ChatRoomService
from .room_identity import derive_room_id

__all__ = [
    "ChatRoomService",
    "MessageService",
    "derive_room_id",
]

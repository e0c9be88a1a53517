"""Chat room and message Pydantic schemas."""

from datetime import datetime

from pydantic import Field

from .common import CamelModel


class ChatRoomCreate(CamelModel):
    """Request body for opening (or re-opening) a chat about a listing."""

    product_id: str | None = Field(None, description="Identifier of the listing to chat about")


class RoomView(CamelModel):
    """Chat room as seen by one of its participants."""

    id: str
    participants: list[str]
    participant_names: dict[str, str]
    listing_id: str
    listing_title: str
    listing_image: str
    created_at: datetime | None
    updated_at: datetime | None
    last_message: str
    last_message_sender_id: str | None
    other_participant_id: str | None
    other_participant_name: str | None = None


class MessageCreate(CamelModel):
    """Request body for posting a chat message."""

    text: str | None = Field(None, description="Message text; surrounding whitespace is trimmed")


class MessageView(CamelModel):
    """Message returned by the API."""

    id: int
    chat_room_id: str
    sender_id: str
    receiver_id: str
    text: str
    timestamp: datetime
    read: bool

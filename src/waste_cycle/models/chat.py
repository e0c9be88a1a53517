"""Models describing listing-scoped chat rooms and their messages."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from waste_cycle.db.session import Base
from waste_cycle.db.time import utcnow


class ChatRoom(Base):
    """Conversation between exactly two participants about one listing.

    The primary key is derived from the participant pair and the listing, so
    at most one row can exist for a given unordered pair and listing.
    """

    __tablename__ = "chat_room"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    listing_id: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    # Snapshot of the listing taken when the room was opened.
    listing_title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    listing_image: Mapped[str] = mapped_column(Text, nullable=False, default="")

    last_message: Mapped[str] = mapped_column(Text, nullable=False, default="")
    last_message_sender_id: Mapped[str | None] = mapped_column(String(128), nullable=True)

    created_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=utcnow
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=utcnow
    )

    # Legacy flat fields kept for older readers.
    buyer_id: Mapped[str | None] = mapped_column(String(128), nullable=True)
    seller_id: Mapped[str | None] = mapped_column(String(128), nullable=True)
    buyer_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    seller_name: Mapped[str | None] = mapped_column(Text, nullable=True)

    participants: Mapped[list[ChatParticipant]] = relationship(
        "ChatParticipant",
        back_populates="room",
        cascade="all, delete-orphan",
        order_by="ChatParticipant.position",
    )
    messages: Mapped[list[ChatMessage]] = relationship(
        "ChatMessage",
        back_populates="room",
        cascade="all, delete-orphan",
    )

    @property
    def participant_ids(self) -> list[str]:
        """Return participant identifiers in storage order."""
        return [participant.user_id for participant in self.participants]

    @property
    def participant_names(self) -> dict[str, str]:
        """Return the display-name snapshot keyed by participant identifier."""
        return {
            participant.user_id: participant.display_name
            for participant in self.participants
        }


class ChatParticipant(Base):
    """Membership of a subject in a chat room with its name snapshot."""

    __tablename__ = "chat_participant"

    room_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("chat_room.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(String(128), primary_key=True, index=True)
    # 0 for the initiating buyer, 1 for the listing owner.
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    display_name: Mapped[str] = mapped_column(Text, nullable=False, default="")

    room: Mapped[ChatRoom] = relationship("ChatRoom", back_populates="participants")


class ChatMessage(Base):
    """Immutable message posted to a chat room."""

    __tablename__ = "chat_message"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    chat_room_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("chat_room.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sender_id: Mapped[str] = mapped_column(String(128), nullable=False)
    receiver_id: Mapped[str] = mapped_column(String(128), nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, index=True
    )
    read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    room: Mapped[ChatRoom] = relationship("ChatRoom", back_populates="messages")

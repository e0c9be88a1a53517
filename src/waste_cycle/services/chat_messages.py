"""Posting and reading chat messages."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from waste_cycle.core.errors import InvalidArgumentError, InvalidStateError
from waste_cycle.core.identity import Subject
from waste_cycle.db.time import utcnow
from waste_cycle.models import ChatMessage, ChatRoom
from waste_cycle.schemas.chat import MessageView
from waste_cycle.services.chat_rooms import ChatRoomService

logger = logging.getLogger(__name__)


def resolve_receiver(room: ChatRoom, sender_id: str) -> str:
    """Return the single participant of ``room`` other than ``sender_id``.

    Raises:
        InvalidStateError: If the stored participants do not yield exactly one
            other participant.
    """
    others = [pid for pid in room.participant_ids if pid != sender_id]
    if len(others) != 1:
        logger.error(
            "Room %s has malformed participants %r for sender %s",
            room.id,
            room.participant_ids,
            sender_id,
        )
        raise InvalidStateError("Cannot determine receiver")
    return others[0]


class MessageService:
    """Service handling message posts and history for chat rooms."""

    def __init__(self, db: Session, rooms: ChatRoomService | None = None) -> None:
        self.db = db
        self.rooms = rooms or ChatRoomService(db)

    def post_message(self, subject: Subject, room_id: str, text: str | None) -> MessageView:
        """Append a message from ``subject`` and refresh the room summary.

        The message row is flushed before the room's summary fields change,
        and both are committed together.
        """
        body = (text or "").strip()
        if not body:
            raise InvalidArgumentError("Message text is required")

        room = self.rooms.load_room_for(subject, room_id)
        receiver_id = resolve_receiver(room, subject.uid)

        message = ChatMessage(
            chat_room_id=room.id,
            sender_id=subject.uid,
            receiver_id=receiver_id,
            text=body,
            timestamp=utcnow(),
            read=False,
        )
        self.db.add(message)
        self.db.flush()

        room.last_message = body
        room.last_message_sender_id = subject.uid
        room.updated_at = message.timestamp
        self.db.commit()
        self.db.refresh(message)

        logger.debug("Message %s posted to room %s by %s", message.id, room.id, subject.uid)
        return MessageView.model_validate(message)

    def list_messages(self, subject: Subject, room_id: str) -> list[MessageView]:
        """Return the full history of a room in ascending timestamp order."""
        room = self.rooms.load_room_for(subject, room_id)
        messages = (
            self.db.query(ChatMessage)
            .filter(ChatMessage.chat_room_id == room.id)
            .order_by(ChatMessage.timestamp.asc(), ChatMessage.id.asc())
            .all()
        )
        return [MessageView.model_validate(message) for message in messages]

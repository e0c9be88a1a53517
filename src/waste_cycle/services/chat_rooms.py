"""Chat room lookup, creation and membership checks."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from waste_cycle.core.errors import (
    ForbiddenError,
    InvalidArgumentError,
    NotFoundError,
    SelfActionError,
)
from waste_cycle.core.identity import Subject, email_local_part
from waste_cycle.db.time import utcnow
from waste_cycle.models import ChatParticipant, ChatRoom, Listing, User
from waste_cycle.schemas.chat import RoomView
from waste_cycle.services.room_identity import derive_room_id

logger = logging.getLogger(__name__)

UNKNOWN_PARTICIPANT_NAME = "Unknown"
BUYER_PLACEHOLDER = "Buyer"
SELLER_PLACEHOLDER = "Seller"


def _activity_key(view: RoomView) -> float:
    stamp: datetime | None = view.updated_at or view.created_at
    return stamp.timestamp() if stamp is not None else 0.0


def resolve_display_name(user: User | None, subject: Subject | None, placeholder: str) -> str:
    """Pick the best available display name for a participant.

    Preference order: stored profile name, identity-provider display name,
    email local-part, stored farm name, then ``placeholder``.
    """
    candidates = (
        user.name if user else None,
        subject.display_name if subject else None,
        subject.email_local_part if subject else None,
        email_local_part(user.email) if user else None,
        user.farm_name if user else None,
    )
    for candidate in candidates:
        if candidate:
            return candidate
    return placeholder


def room_view(room: ChatRoom, viewer_id: str) -> RoomView:
    """Serialize ``room`` relative to the participant ``viewer_id``."""
    participants = room.participant_ids
    names = room.participant_names
    other_id = next((pid for pid in participants if pid != viewer_id), None)
    other_name = names.get(other_id) if other_id is not None else None

    return RoomView(
        id=room.id,
        participants=participants,
        participant_names=names,
        listing_id=room.listing_id,
        listing_title=room.listing_title,
        listing_image=room.listing_image,
        created_at=room.created_at,
        updated_at=room.updated_at,
        last_message=room.last_message,
        last_message_sender_id=room.last_message_sender_id,
        other_participant_id=other_id,
        other_participant_name=other_name or UNKNOWN_PARTICIPANT_NAME,
    )


class ChatRoomService:
    """Service implementing room find-or-create and participant authorization."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def _load_room(self, room_id: str) -> ChatRoom | None:
        return self.db.get(ChatRoom, room_id)

    def load_room_for(self, subject: Subject, room_id: str) -> ChatRoom:
        """Return the room if ``subject`` participates in it.

        Raises:
            NotFoundError: If no room exists under ``room_id``.
            ForbiddenError: If ``subject`` is not one of its participants.
        """
        room = self._load_room(room_id)
        if room is None:
            raise NotFoundError("Chat room not found")
        if subject.uid not in room.participant_ids:
            logger.warning("User %s is not a participant in room %s", subject.uid, room_id)
            raise ForbiddenError("Not authorized to access this chat room")
        return room

    def list_rooms_for_user(self, subject: Subject) -> list[RoomView]:
        """Return every room ``subject`` participates in, most recent first."""
        rooms = (
            self.db.query(ChatRoom)
            .join(ChatParticipant, ChatParticipant.room_id == ChatRoom.id)
            .filter(ChatParticipant.user_id == subject.uid)
            .all()
        )
        views = [room_view(room, subject.uid) for room in rooms]
        views.sort(key=_activity_key, reverse=True)
        return views

    def find_or_create_room(
        self, subject: Subject, listing_id: str | None
    ) -> tuple[RoomView, bool]:
        """Return the room between ``subject`` and the listing owner.

        The room key is derived from the participant pair and the listing, so
        repeated or concurrent calls from either side converge on one row. An
        existing room is returned untouched.

        Returns:
            The room view and ``True`` if this call created the room.
        """
        if not listing_id or not listing_id.strip():
            raise InvalidArgumentError("Product ID is required")

        listing = self.db.get(Listing, listing_id)
        if listing is None:
            raise NotFoundError("Product not found")

        owner_id = listing.owner_id
        if owner_id == subject.uid:
            raise SelfActionError("You cannot start a chat for your own product")

        room_id = derive_room_id(subject.uid, owner_id, listing.id)
        existing = self._load_room(room_id)
        if existing is not None:
            return room_view(existing, subject.uid), False

        buyer_name = resolve_display_name(
            self.db.get(User, subject.uid), subject, BUYER_PLACEHOLDER
        )
        seller_name = resolve_display_name(self.db.get(User, owner_id), None, SELLER_PLACEHOLDER)
        now = utcnow()
        room = ChatRoom(
            id=room_id,
            listing_id=listing.id,
            listing_title=listing.title or "",
            listing_image=listing.primary_image,
            last_message="",
            last_message_sender_id=None,
            created_at=now,
            updated_at=now,
            buyer_id=subject.uid,
            seller_id=owner_id,
            buyer_name=buyer_name,
            seller_name=seller_name,
            participants=[
                ChatParticipant(user_id=subject.uid, position=0, display_name=buyer_name),
                ChatParticipant(user_id=owner_id, position=1, display_name=seller_name),
            ],
        )

        # The primary key makes the insert conditional: if another request
        # created the room since the lookup above, the insert fails and the
        # stored room wins.
        self.db.add(room)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            existing = self._load_room(room_id)
            if existing is None:
                raise
            logger.info("Room %s was created concurrently; returning stored room", room_id)
            return room_view(existing, subject.uid), False

        logger.info(
            "Created chat room %s for listing %s between %s and %s",
            room_id,
            listing.id,
            subject.uid,
            owner_id,
        )
        return room_view(room, subject.uid), True

    def get_room(self, subject: Subject, room_id: str) -> RoomView:
        """Return a single room the caller participates in."""
        return room_view(self.load_room_for(subject, room_id), subject.uid)

    def delete_room(self, room_id: str) -> bool:
        """Delete a room together with its participants and messages.

        Authorization is the caller's responsibility. Returns False when no
        room existed.
        """
        room = self._load_room(room_id)
        if room is None:
            logger.info("Delete requested for missing room %s", room_id)
            return False
        self.db.delete(room)
        self.db.commit()
        logger.info("Deleted chat room %s", room_id)
        return True

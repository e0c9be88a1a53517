# mypy: ignore-errors
# tests/services/test_chat_messages.py
"""Tests for the chat message service."""

import pytest

from waste_cycle.core.errors import (
    ForbiddenError,
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
)
from waste_cycle.models import ChatMessage, ChatParticipant, ChatRoom
from waste_cycle.services.chat_messages import MessageService


@pytest.fixture()
def message_service(db_session, room_service) -> MessageService:
    return MessageService(db_session, room_service)


@pytest.fixture()
def room_id(room_service, buyer, seller, listing, subject_for) -> str:
    view, _ = room_service.find_or_create_room(subject_for(buyer), listing.id)
    return view.id


def test_post_message_resolves_receiver(message_service, room_id, buyer, seller, subject_for) -> None:
    """A message from either participant is addressed to the other one."""
    from_buyer = message_service.post_message(subject_for(buyer), room_id, "hello")
    from_seller = message_service.post_message(subject_for(seller), room_id, "hi, still interested?")

    assert from_buyer.sender_id == "u1"
    assert from_buyer.receiver_id == "u2"
    assert from_seller.sender_id == "u2"
    assert from_seller.receiver_id == "u1"


def test_post_message_stores_trimmed_unread_message(
    message_service, db_session, room_id, buyer, subject_for
) -> None:
    view = message_service.post_message(subject_for(buyer), room_id, "   how much per tonne?  ")

    assert view.text == "how much per tonne?"
    assert view.read is False
    assert view.chat_room_id == room_id
    assert isinstance(view.id, int)

    stored = db_session.get(ChatMessage, view.id)
    assert stored.text == "how much per tonne?"


def test_post_message_updates_room_summary(
    message_service, db_session, room_id, buyer, subject_for
) -> None:
    """The room's summary fields follow the latest message."""
    before = db_session.get(ChatRoom, room_id).updated_at
    view = message_service.post_message(subject_for(buyer), room_id, " can I pick up Friday? ")

    room = db_session.get(ChatRoom, room_id)
    assert room.last_message == "can I pick up Friday?"
    assert room.last_message_sender_id == "u1"
    assert room.updated_at >= before
    assert room.updated_at == view.timestamp


@pytest.mark.parametrize("text", [None, "", "    ", "\n\t"])
def test_post_empty_text_is_rejected(message_service, room_id, buyer, subject_for, text) -> None:
    with pytest.raises(InvalidArgumentError):
        message_service.post_message(subject_for(buyer), room_id, text)


def test_post_by_outsider_is_forbidden(message_service, db_session, room_id, outsider, subject_for) -> None:
    with pytest.raises(ForbiddenError):
        message_service.post_message(subject_for(outsider), room_id, "hi")
    assert db_session.query(ChatMessage).count() == 0


def test_post_to_missing_room(message_service, buyer, subject_for) -> None:
    with pytest.raises(NotFoundError):
        message_service.post_message(subject_for(buyer), "a" * 32, "hi")


def test_post_in_room_without_receiver_is_invalid_state(
    message_service, db_session, buyer, subject_for
) -> None:
    """A room whose participants do not yield exactly one receiver is rejected."""
    broken = ChatRoom(
        id="b" * 32,
        listing_id="p9",
        participants=[ChatParticipant(user_id="u1", position=0, display_name="Buyer Bee")],
    )
    db_session.add(broken)
    db_session.commit()

    with pytest.raises(InvalidStateError):
        message_service.post_message(subject_for(buyer), "b" * 32, "anyone there?")
    assert db_session.query(ChatMessage).count() == 0


def test_list_messages_in_posting_order(message_service, room_id, buyer, seller, subject_for) -> None:
    """Messages come back oldest first."""
    first = message_service.post_message(subject_for(buyer), room_id, "M1")
    second = message_service.post_message(subject_for(seller), room_id, "M2")
    third = message_service.post_message(subject_for(buyer), room_id, "M3")

    history = message_service.list_messages(subject_for(seller), room_id)
    assert [m.id for m in history] == [first.id, second.id, third.id]
    assert [m.text for m in history] == ["M1", "M2", "M3"]


def test_list_messages_requires_membership(message_service, room_id, outsider, subject_for) -> None:
    with pytest.raises(ForbiddenError):
        message_service.list_messages(subject_for(outsider), room_id)


def test_list_messages_empty_room(message_service, room_id, buyer, subject_for) -> None:
    assert message_service.list_messages(subject_for(buyer), room_id) == []

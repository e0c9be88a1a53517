# src/waste_cycle/api/v1/endpoints/chat.py
"""Chat room and message endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from waste_cycle.schemas.chat import ChatRoomCreate, MessageCreate, MessageView, RoomView

from ..dependencies import (
    AdminUserDep,
    ChatRoomServiceDep,
    CurrentUserDep,
    MessageServiceDep,
    SubjectDep,
)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.get("", response_model=list[RoomView])
async def list_chat_rooms(
    subject: SubjectDep,
    _current_user: CurrentUserDep,
    rooms: ChatRoomServiceDep,
) -> list[RoomView]:
    """List the caller's chat rooms, most recently active first."""
    return rooms.list_rooms_for_user(subject)


@router.post(
    "",
    response_model=RoomView,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_200_OK: {"model": RoomView, "description": "Room already existed"}},
)
async def open_chat_room(
    payload: ChatRoomCreate,
    response: Response,
    subject: SubjectDep,
    _current_user: CurrentUserDep,
    rooms: ChatRoomServiceDep,
) -> RoomView:
    """Open the chat room with a listing's owner, reusing it if it exists."""
    view, created = rooms.find_or_create_room(subject, payload.product_id)
    if not created:
        response.status_code = status.HTTP_200_OK
    return view


@router.get("/{room_id}", response_model=RoomView)
async def get_chat_room(
    room_id: str,
    subject: SubjectDep,
    rooms: ChatRoomServiceDep,
) -> RoomView:
    """Get a single chat room the caller participates in."""
    return rooms.get_room(subject, room_id)


@router.delete("/{room_id}")
async def delete_chat_room(
    room_id: str,
    _admin: AdminUserDep,
    rooms: ChatRoomServiceDep,
) -> dict[str, str]:
    """Delete a chat room and its messages (administrators only)."""
    rooms.delete_room(room_id)
    return {"status": "deleted", "message": "Chat room deleted"}


@router.post(
    "/{room_id}/messages",
    response_model=MessageView,
    status_code=status.HTTP_201_CREATED,
)
async def post_chat_message(
    room_id: str,
    payload: MessageCreate,
    subject: SubjectDep,
    messages: MessageServiceDep,
) -> MessageView:
    """Post a message to a chat room."""
    return messages.post_message(subject, room_id, payload.text)


@router.get("/{room_id}/messages", response_model=list[MessageView])
async def list_chat_messages(
    room_id: str,
    subject: SubjectDep,
    messages: MessageServiceDep,
) -> list[MessageView]:
    """Return the full message history of a chat room, oldest first."""
    return messages.list_messages(subject, room_id)

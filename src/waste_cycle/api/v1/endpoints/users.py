"""User profile endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from waste_cycle.core.errors import NotFoundError
from waste_cycle.models import User
from waste_cycle.schemas.user import ProfileResponse, ProfileUpdateRequest, RoleUpdateRequest
from waste_cycle.services import user_service

from ..dependencies import AdminUserDep, CurrentUserDep, SessionDep

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(current_user: CurrentUserDep) -> User:
    """Return the caller's profile."""
    return current_user


@router.patch("/me", response_model=ProfileResponse)
async def update_my_profile(
    update_data: ProfileUpdateRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> User:
    """Update the caller's display name or farm name.

    Existing chat rooms keep the names captured when they were opened.
    """
    return user_service.update_profile(db, current_user, update_data)


@router.get("/{user_id}", response_model=ProfileResponse)
async def get_user_profile(
    user_id: str,
    _current_user: CurrentUserDep,
    db: SessionDep,
) -> User:
    """Return another user's profile."""
    user = user_service.get_user(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


@router.patch("/{user_id}/role", response_model=ProfileResponse)
async def update_user_role(
    user_id: str,
    payload: RoleUpdateRequest,
    _admin: AdminUserDep,
    db: SessionDep,
) -> User:
    """Change a user's role (administrators only)."""
    return user_service.set_role(db, user_id, payload.role)

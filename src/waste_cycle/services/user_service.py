"""CRUD-style helpers for managing user profiles."""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from waste_cycle.core.errors import NotFoundError
from waste_cycle.core.identity import Subject
from waste_cycle.models.user import User, UserRole
from waste_cycle.schemas.user import ProfileUpdateRequest

__all__ = [
    "get_user",
    "get_or_provision_user",
    "update_profile",
    "set_role",
]

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: str) -> User | None:
    """Return a single user by subject identifier."""
    return db.get(User, user_id)


def get_or_provision_user(db: Session, subject: Subject) -> User:
    """Return the profile for ``subject``, creating it with defaults if absent."""
    user = db.get(User, subject.uid)
    if user is not None:
        return user

    user = User(
        id=subject.uid,
        name=subject.display_name or subject.email_local_part or "",
        email=subject.email,
        role=UserRole.USER.value,
    )
    # A parallel first request may have provisioned the same uid; keep its row.
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        stored = db.get(User, subject.uid)
        if stored is None:
            raise
        logger.info("Profile for subject %s was provisioned concurrently", subject.uid)
        return stored

    db.refresh(user)
    logger.info("Provisioned profile for subject %s", subject.uid)
    return user


def update_profile(db: Session, user: User, update_data: ProfileUpdateRequest) -> User:
    """Apply partial updates to a user's own profile."""
    update_dict = update_data.model_dump(exclude_unset=True)
    for key, value in update_dict.items():
        setattr(user, key, value)

    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def set_role(db: Session, user_id: str, role: str) -> User:
    """Change the role of an existing user."""
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    user.role = UserRole(role).value
    db.commit()
    db.refresh(user)
    logger.info("Set role of %s to %s", user_id, user.role)
    return user

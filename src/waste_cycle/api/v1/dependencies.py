"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from waste_cycle.core.errors import ForbiddenError, UnauthenticatedError
from waste_cycle.core.identity import IdentityGateway, Subject, get_identity_gateway
from waste_cycle.db.session import get_db
from waste_cycle.models import User
from waste_cycle.services.chat_messages import MessageService
from waste_cycle.services.chat_rooms import ChatRoomService
from waste_cycle.services.user_service import get_or_provision_user

# HTTP Bearer scheme; missing credentials are reported as 401 by get_current_subject
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
IdentityGatewayDep = Annotated[IdentityGateway, Depends(get_identity_gateway)]


def get_current_subject(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    gateway: IdentityGatewayDep,
) -> Subject:
    """Resolve the bearer credential to a verified subject.

    Raises:
        UnauthenticatedError: If the credential is missing or rejected.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError("User not authenticated")
    return gateway.verify(credentials.credentials)


SubjectDep = Annotated[Subject, Depends(get_current_subject)]


def get_current_user(subject: SubjectDep, db: SessionDep) -> User:
    """Return the caller's profile, provisioning it on first access."""
    return get_or_provision_user(db, subject)


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]


def get_admin_user(current_user: CurrentUserDep) -> User:
    """Return the caller if they hold the administrator role."""
    if not current_user.is_admin:
        raise ForbiddenError("Administrator access required")
    return current_user


AdminUserDep = Annotated[User, Depends(get_admin_user)]


def get_chat_room_service(db: SessionDep) -> ChatRoomService:
    """Return a chat room service bound to the request session."""
    return ChatRoomService(db)


def get_message_service(db: SessionDep) -> MessageService:
    """Return a message service bound to the request session."""
    return MessageService(db)


ChatRoomServiceDep = Annotated[ChatRoomService, Depends(get_chat_room_service)]
MessageServiceDep = Annotated[MessageService, Depends(get_message_service)]

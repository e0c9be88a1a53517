"""Service-layer error taxonomy.

Every failure a service can report derives from :class:`ServiceError`. Each
class carries the error ``kind`` surfaced to clients and the HTTP status the
API layer answers with; the mapping lives here so services never import
FastAPI.
"""

from __future__ import annotations

from fastapi import status


class ServiceError(RuntimeError):
    """Base exception for failures raised by the service layer."""

    kind: str = "ServiceError"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UnauthenticatedError(ServiceError):
    """Missing or invalid credential, or a malformed subject identifier."""

    kind = "Unauthenticated"
    status_code = status.HTTP_401_UNAUTHORIZED


class InvalidArgumentError(ServiceError):
    """A required field is missing or a value is malformed."""

    kind = "InvalidArgument"
    status_code = status.HTTP_400_BAD_REQUEST


class SelfActionError(InvalidArgumentError):
    """The caller attempted to open a chat against their own listing."""

    kind = "SelfAction"


class ForbiddenError(ServiceError):
    """The caller is authenticated but not allowed to touch the resource."""

    kind = "Forbidden"
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(ServiceError):
    """The requested room, listing or user does not exist."""

    kind = "NotFound"
    status_code = status.HTTP_404_NOT_FOUND


class InvalidStateError(ServiceError):
    """Stored data violates an invariant, e.g. a room without a receiver."""

    kind = "InvalidState"
    status_code = status.HTTP_400_BAD_REQUEST


__all__ = [
    "ServiceError",
    "UnauthenticatedError",
    "InvalidArgumentError",
    "SelfActionError",
    "ForbiddenError",
    "NotFoundError",
    "InvalidStateError",
]

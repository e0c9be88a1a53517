"""User profile Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator

from .common import CamelModel


class ProfileResponse(CamelModel):
    """Profile information returned by the API."""

    id: str
    name: str
    email: str | None
    role: str
    farm_name: str | None
    created_at: datetime | None = None


class ProfileUpdateRequest(CamelModel):
    """Schema for updating the caller's own profile."""

    name: str | None = Field(
        None,
        min_length=1,
        max_length=100,
        description="Display name shown to trading partners (1-100 characters)",
    )
    farm_name: str | None = Field(None, max_length=200, description="Optional farm name")

    @field_validator("name")
    @classmethod
    def require_name(cls, v: str | None) -> str:
        """A profile always has a name; it may be omitted but not cleared."""
        if v is None or not v.strip():
            raise ValueError("Name must not be empty")
        return v.strip()


class RoleUpdateRequest(CamelModel):
    """Schema for an administrator changing a user's role."""

    role: Literal["user", "admin"]

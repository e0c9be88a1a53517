"""Listing-related Pydantic schemas."""

from datetime import datetime

from pydantic import Field, field_validator

from .common import CamelModel


def _strip_title(v: str) -> str:
    stripped = v.strip()
    if not stripped:
        raise ValueError("Title must not be blank")
    return stripped


class ListingCreate(CamelModel):
    """Schema for creating a new listing."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field("", max_length=5000)
    waste_type: str | None = Field(None, max_length=64, description="e.g. manure, compost, bedding")
    quantity: float | None = Field(None, ge=0)
    unit: str | None = Field(None, max_length=32)
    price: float | None = Field(None, ge=0)
    location: str | None = None
    images: list[str] = Field(default_factory=list, description="Image URIs; the first is primary")

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        """Reject titles consisting only of whitespace."""
        return _strip_title(v)


class ListingUpdate(CamelModel):
    """Schema for partially updating a listing."""

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=5000)
    waste_type: str | None = Field(None, max_length=64)
    quantity: float | None = Field(None, ge=0)
    unit: str | None = Field(None, max_length=32)
    price: float | None = Field(None, ge=0)
    location: str | None = None
    images: list[str] | None = None
    sold: bool | None = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str | None) -> str | None:
        # None leaves the stored title unchanged.
        return None if v is None else _strip_title(v)


class ListingResponse(CamelModel):
    """Listing information returned by the API."""

    id: str
    owner_id: str
    title: str
    description: str
    waste_type: str | None
    quantity: float | None
    unit: str | None
    price: float | None
    location: str | None
    images: list[str]
    sold: bool
    created_at: datetime | None
    updated_at: datetime | None

"""SQLAlchemy model for marketplace listings."""

from __future__ import annotations

from datetime import datetime
from uuid import uuid4

from sqlalchemy import JSON, Boolean, DateTime, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from waste_cycle.db.session import Base
from waste_cycle.db.time import utcnow


def _new_listing_id() -> str:
    return uuid4().hex


class Listing(Base):
    """Fertilizer or livestock by-product offered by its owner."""

    __tablename__ = "listings"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_listing_id)
    owner_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("users.id"), nullable=False, index=True
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    waste_type: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    quantity: Mapped[float | None] = mapped_column(Float, nullable=True)
    unit: Mapped[str | None] = mapped_column(String(32), nullable=True)
    price: Mapped[float | None] = mapped_column(Float, nullable=True)
    location: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Ordered image URIs; the first entry is the primary image.
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    sold: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    @property
    def primary_image(self) -> str:
        """Return the first image URI or an empty string."""
        return self.images[0] if self.images else ""

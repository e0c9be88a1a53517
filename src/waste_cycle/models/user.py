"""SQLAlchemy models for marketplace user profiles."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from waste_cycle.db.session import Base
from waste_cycle.db.time import utcnow


class UserRole(str, Enum):
    """Roles a marketplace account can hold."""

    USER = "user"
    ADMIN = "admin"


class User(Base):
    """Profile keyed by the identity provider's subject identifier.

    Rows are provisioned on first authenticated access; the identity provider
    remains the source of truth for credentials.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False, default="")
    email: Mapped[str | None] = mapped_column(Text, nullable=True)
    role: Mapped[str] = mapped_column(String(16), nullable=False, default=UserRole.USER.value)
    farm_name: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    @property
    def is_admin(self) -> bool:
        """Return True if the user holds the administrator role."""
        return self.role == UserRole.ADMIN.value

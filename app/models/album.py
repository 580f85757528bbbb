"""
Album model for organizing photos into collections.
"""
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import String, DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.base import utcnow

if TYPE_CHECKING:
    from app.models.photo import Photo


class Album(Base):
    """Album model for grouping photos together."""

    __tablename__ = "albums"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    # Album information
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Manual drag-and-drop position among all albums
    order: Mapped[int] = mapped_column(Integer, default=0, nullable=False, index=True)

    # Cover photo (optional). Kept without a foreign key to avoid a
    # circular albums <-> photos dependency; the services clear it.
    cover_photo_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, onupdate=utcnow
    )

    # Relationships
    photos: Mapped[List["Photo"]] = relationship(
        "Photo",
        back_populates="album",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Photo.order",
    )

    def __repr__(self) -> str:
        return f"<Album(id={self.id}, name={self.name})>"

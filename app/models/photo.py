"""
Photo model for storing photo metadata.
Actual photo files live in the local upload directory.
"""
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import String, DateTime, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.base import utcnow

if TYPE_CHECKING:
    from app.models.album import Album


class Photo(Base):
    """
    Photo model for storing photo metadata.
    Each photo belongs to exactly one album.
    """

    __tablename__ = "photos"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    album_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("albums.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Public path under the uploads mount, e.g. /uploads/1700000000000-cat.jpg
    path: Mapped[str] = mapped_column(String(500), nullable=False)

    # File metadata
    original_filename: Mapped[str] = mapped_column(String(255), nullable=False)
    content_type: Mapped[str] = mapped_column(String(100), nullable=False)
    file_size: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Position inside the album
    order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    album: Mapped["Album"] = relationship("Album", back_populates="photos")

    @property
    def filename(self) -> str:
        """Stored filename (last segment of the public path)."""
        return self.path.rsplit("/", 1)[-1]

    def __repr__(self) -> str:
        return f"<Photo(id={self.id}, path={self.path})>"

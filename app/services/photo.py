"""
Photo service for managing photos.
"""
import html
import logging
from typing import Optional, Sequence

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import NotFoundError
from app.models.album import Album
from app.models.photo import Photo
from app.schemas.photo import PhotoOrderItem
from app.services.local_storage import LocalStorageService, get_storage_service

logger = logging.getLogger("app.photo")

FIT_MODES = ("contain", "cover", "fill")

_EXPAND_PAGE = """<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <title>{title}</title>
    <style>
      body {{ margin: 0; padding: 0; background-color: black; }}
      img {{ width: 100%; height: auto; object-fit: {fit}; display: block; }}
{extra}
    </style>
  </head>
  <body>
    <img src="{src}" alt="Full Screen Photo">
  </body>
</html>
"""

_FIT_STYLES = {
    "contain": (
        "      html, body { height: 100%; overflow: auto; }\n"
        "      img { max-width: 100%; max-height: 100%; }"
    ),
    "fill": (
        "      html, body { height: auto; overflow: auto; }\n"
        "      img { min-width: 100vw; min-height: 100vh; }"
    ),
    "cover": "",
}


def render_expand_page(photo_path: str, fit: str = "contain") -> str:
    """
    Standalone page showing one photo on a black background.

    Args:
        photo_path: Public path of the photo
        fit: CSS object-fit mode (contain, cover or fill)
    """
    if fit not in FIT_MODES:
        fit = "contain"
    escaped = html.escape(photo_path, quote=True)
    return _EXPAND_PAGE.format(
        title=html.escape(photo_path.rsplit("/", 1)[-1]),
        fit=fit,
        extra=_FIT_STYLES[fit],
        src=escaped,
    )


class PhotoService:
    """
    Service for handling photo operations.
    Binaries go to the local upload directory, metadata to the database.
    """

    def __init__(self, db: AsyncSession, storage: Optional[LocalStorageService] = None):
        self.db = db
        self.storage = storage or get_storage_service()

    async def upload_photo(
        self,
        album: Album,
        file_content: bytes,
        filename: str,
        content_type: str,
    ) -> Photo:
        """
        Store a photo file and save its metadata at the end of the album.

        Args:
            album: Album receiving the photo
            file_content: Photo file content as bytes
            filename: Original filename
            content_type: MIME type of the file

        Returns:
            Created Photo model
        """
        path = await self.storage.save(filename, file_content)

        try:
            count = await self.count_by_album(album.id)
            photo = Photo(
                album_id=album.id,
                path=path,
                original_filename=filename,
                content_type=content_type,
                file_size=len(file_content),
                order=count + 1,
            )
            self.db.add(photo)
            await self.db.flush()
            await self.db.refresh(photo)
        except Exception:
            # No row references the file, so do not leave it behind
            await self.storage.delete(path)
            raise

        logger.info(
            "Photo uploaded",
            extra={"event": "photo", "photo_id": photo.id, "album_id": album.id},
        )
        return photo

    async def get_photo_by_id(self, photo_id: int) -> Optional[Photo]:
        """Get a photo by ID, or None."""
        return await self.db.get(Photo, photo_id)

    async def require_photo(self, photo_id: int) -> Photo:
        """Get a photo by ID or raise NotFoundError."""
        photo = await self.get_photo_by_id(photo_id)
        if photo is None:
            raise NotFoundError("Photo", photo_id)
        return photo

    async def delete_photo(self, photo: Photo) -> bool:
        """
        Delete a photo row and its file.
        Albums using it as cover fall back to no cover.

        Returns:
            True if the file was removed as well
        """
        photo_id = photo.id
        path = photo.path
        await self.db.execute(
            update(Album)
            .where(Album.cover_photo_id == photo_id)
            .values(cover_photo_id=None)
        )
        await self.db.delete(photo)
        # Files go only after the rows are committed
        await self.db.commit()

        removed = await self.storage.delete(path)
        logger.info(
            "Photo deleted",
            extra={"event": "photo", "photo_id": photo_id, "file_removed": removed},
        )
        return removed

    async def reorder_photos(self, items: Sequence[PhotoOrderItem]) -> int:
        """
        Write the given order values. Either every photo exists and all are
        updated, or NotFoundError is raised and nothing is written.
        """
        if not items:
            return 0
        ids = {item.id for item in items}
        found = set(
            (await self.db.execute(select(Photo.id).where(Photo.id.in_(ids)))).scalars().all()
        )
        missing = sorted(ids - found)
        if missing:
            raise NotFoundError("Photo", missing[0])

        for item in items:
            await self.db.execute(
                update(Photo).where(Photo.id == item.id).values(order=item.order)
            )
        await self.db.flush()
        return len(items)

    async def count_photos(self) -> int:
        """Total number of photos."""
        result = await self.db.execute(select(func.count(Photo.id)))
        return result.scalar() or 0

    async def count_by_album(self, album_id: int) -> int:
        """Number of photos in one album."""
        result = await self.db.execute(
            select(func.count(Photo.id)).where(Photo.album_id == album_id)
        )
        return result.scalar() or 0


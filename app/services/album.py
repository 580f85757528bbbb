"""
Album service for managing albums, their order, covers and archives.
"""
import asyncio
import io
import logging
import zipfile
from typing import Dict, List, Optional, Sequence, Tuple

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import NotFoundError, ValidationError
from app.models.album import Album
from app.models.photo import Photo
from app.schemas.album import (
    AlbumCreate,
    AlbumListItem,
    AlbumOrderItem,
    AlbumUpdate,
    AlbumWithPhotos,
)
from app.schemas.photo import PhotoSummary
from app.services.local_storage import LocalStorageService, get_storage_service
from app.utils.ordering import next_order

logger = logging.getLogger("app.album")


class AlbumService:
    """
    Service for handling album operations.
    Database rows are committed first; files are removed afterwards and their
    failures are only logged.
    """

    def __init__(self, db: AsyncSession, storage: Optional[LocalStorageService] = None):
        self.db = db
        self.storage = storage or get_storage_service()

    # ============== Album CRUD ==============

    async def create_album(self, album_data: AlbumCreate) -> Album:
        """
        Create a new album at the end of the album order.

        Args:
            album_data: Album creation data

        Returns:
            Created Album model
        """
        max_order = (
            await self.db.execute(select(func.max(Album.order)))
        ).scalar()
        album = Album(
            name=album_data.name,
            description=_clean_description(album_data.description),
            order=next_order(max_order),
        )

        self.db.add(album)
        await self.db.flush()
        await self.db.refresh(album)
        logger.info("Album created", extra={"event": "album", "album_id": album.id})
        return album

    async def get_album_by_id(self, album_id: int) -> Optional[Album]:
        """Get an album by ID, or None."""
        result = await self.db.execute(select(Album).where(Album.id == album_id))
        return result.scalar_one_or_none()

    async def require_album(self, album_id: int) -> Album:
        """Get an album by ID or raise NotFoundError."""
        album = await self.get_album_by_id(album_id)
        if album is None:
            raise NotFoundError("Album", album_id)
        return album

    async def count_albums(self) -> int:
        """Total number of albums."""
        result = await self.db.execute(select(func.count(Album.id)))
        return result.scalar() or 0

    async def get_album_photo_count(self, album_id: int) -> int:
        """Get the number of photos in an album."""
        result = await self.db.execute(
            select(func.count(Photo.id)).where(Photo.album_id == album_id)
        )
        return result.scalar() or 0

    async def list_albums(self) -> List[AlbumListItem]:
        """
        All albums in manual order with photo counts and cover paths.

        The cover path is the chosen cover photo's path, falling back to the
        most recently uploaded photo of the album.
        """
        albums = list(
            (
                await self.db.execute(select(Album).order_by(Album.order, Album.id))
            ).scalars().all()
        )
        if not albums:
            return []

        counts: Dict[int, int] = dict(
            (
                await self.db.execute(
                    select(Photo.album_id, func.count(Photo.id)).group_by(Photo.album_id)
                )
            ).all()
        )

        cover_ids = [a.cover_photo_id for a in albums if a.cover_photo_id is not None]
        cover_paths: Dict[int, str] = {}
        if cover_ids:
            cover_paths = dict(
                (
                    await self.db.execute(
                        select(Photo.id, Photo.path).where(Photo.id.in_(cover_ids))
                    )
                ).all()
            )

        latest_paths: Dict[int, str] = {}
        rows = await self.db.execute(
            select(Photo.album_id, Photo.path).order_by(
                Photo.album_id, Photo.created_at.desc(), Photo.id.desc()
            )
        )
        for album_id, path in rows.all():
            latest_paths.setdefault(album_id, path)

        items = []
        for album in albums:
            cover_path = None
            if album.cover_photo_id is not None:
                cover_path = cover_paths.get(album.cover_photo_id)
            if cover_path is None:
                cover_path = latest_paths.get(album.id)
            items.append(
                AlbumListItem(
                    id=album.id,
                    name=album.name,
                    description=album.description,
                    order=album.order,
                    photo_count=counts.get(album.id, 0),
                    cover_photo_id=album.cover_photo_id,
                    cover_photo_path=cover_path,
                )
            )
        return items

    async def get_album_photos(self, album_id: int) -> List[Photo]:
        """Photos of an album in display order."""
        result = await self.db.execute(
            select(Photo)
            .where(Photo.album_id == album_id)
            .order_by(Photo.order, Photo.id)
        )
        return list(result.scalars().all())

    async def get_album_with_photos(self, album: Album) -> AlbumWithPhotos:
        """
        Album with its photos ordered by their order field.

        Args:
            album: Album model

        Returns:
            AlbumWithPhotos schema
        """
        photos = await self.get_album_photos(album.id)
        return AlbumWithPhotos(
            id=album.id,
            name=album.name,
            description=album.description,
            order=album.order,
            cover_photo_id=album.cover_photo_id,
            created_at=album.created_at,
            updated_at=album.updated_at,
            photo_count=len(photos),
            photos=[PhotoSummary.model_validate(p) for p in photos],
        )

    async def update_album(self, album: Album, update_data: AlbumUpdate) -> Album:
        """
        Rename an album and replace its description.
        A blank description clears it.
        """
        album.name = update_data.name
        album.description = _clean_description(update_data.description)

        await self.db.flush()
        await self.db.refresh(album)
        logger.info("Album updated", extra={"event": "album", "album_id": album.id})
        return album

    async def _delete_photo_rows(self, album_id: Optional[int] = None) -> List[str]:
        """Delete photo rows (of one album, or all) and return their paths."""
        query = select(Photo.path)
        stmt = delete(Photo)
        if album_id is not None:
            query = query.where(Photo.album_id == album_id)
            stmt = stmt.where(Photo.album_id == album_id)
        paths = [row[0] for row in (await self.db.execute(query)).all()]
        await self.db.execute(stmt)
        return paths

    async def delete_album(self, album: Album) -> int:
        """
        Delete an album with its photos and their files.

        Returns:
            Number of photos deleted with the album
        """
        album_id = album.id
        paths = await self._delete_photo_rows(album_id)
        await self.db.delete(album)
        # Files go only after the rows are committed
        await self.db.commit()

        await self.storage.delete_many(paths)
        logger.info(
            "Album deleted",
            extra={"event": "album", "album_id": album_id, "photo_count": len(paths)},
        )
        return len(paths)

    async def clear_album(self, album: Album) -> int:
        """
        Delete every photo of an album but keep the album.

        Returns:
            Number of photos deleted
        """
        paths = await self._delete_photo_rows(album.id)
        album.cover_photo_id = None
        # Files go only after the rows are committed
        await self.db.commit()

        await self.storage.delete_many(paths)
        logger.info(
            "Album cleared",
            extra={"event": "album", "album_id": album.id, "photo_count": len(paths)},
        )
        return len(paths)

    async def delete_all_albums(self) -> Tuple[int, int]:
        """
        Delete all albums, all photos and their files.

        Returns:
            (albums deleted, photos deleted)
        """
        album_count = await self.count_albums()
        paths = await self._delete_photo_rows()
        await self.db.execute(delete(Album))
        # Files go only after the rows are committed
        await self.db.commit()

        await self.storage.delete_many(paths)
        logger.info(
            "All albums deleted",
            extra={"event": "album", "album_count": album_count, "photo_count": len(paths)},
        )
        return album_count, len(paths)

    # ============== Ordering ==============

    async def reorder_albums(self, items: Sequence[AlbumOrderItem]) -> int:
        """
        Write the given order values. Either every album exists and all are
        updated, or NotFoundError is raised and nothing is written.

        Returns:
            Number of albums updated
        """
        if not items:
            return 0
        ids = {item.id for item in items}
        found = set(
            (await self.db.execute(select(Album.id).where(Album.id.in_(ids)))).scalars().all()
        )
        missing = sorted(ids - found)
        if missing:
            raise NotFoundError("Album", missing[0])

        for item in items:
            await self.db.execute(
                update(Album).where(Album.id == item.id).values(order=item.order)
            )
        await self.db.flush()
        return len(items)

    # ============== Cover & moving ==============

    async def set_cover(self, album_id: int, photo_id: int) -> Album:
        """
        Make a photo the album's cover.

        Raises:
            NotFoundError: album or photo does not exist
            ValidationError: photo belongs to another album
        """
        album = await self.require_album(album_id)
        photo = await self.db.get(Photo, photo_id)
        if photo is None:
            raise NotFoundError("Photo", photo_id)
        if photo.album_id != album.id:
            raise ValidationError(f"Photo {photo_id} is not in album {album_id}")

        album.cover_photo_id = photo.id
        await self.db.flush()
        await self.db.refresh(album)
        return album

    async def move_photo(self, photo_id: int, target_album_id: int) -> Photo:
        """
        Move a photo to the end of another album.
        The source album loses its cover if it pointed at this photo.
        """
        photo = await self.db.get(Photo, photo_id)
        if photo is None:
            raise NotFoundError("Photo", photo_id)
        target = await self.get_album_by_id(target_album_id)
        if target is None:
            raise NotFoundError("Album", target_album_id)

        if photo.album_id == target.id:
            return photo

        source_id = photo.album_id
        await self.db.execute(
            update(Album)
            .where(Album.id == source_id, Album.cover_photo_id == photo.id)
            .values(cover_photo_id=None)
        )
        max_order = (
            await self.db.execute(
                select(func.max(Photo.order)).where(Photo.album_id == target.id)
            )
        ).scalar()
        photo.album_id = target.id
        photo.order = next_order(max_order)

        await self.db.flush()
        await self.db.refresh(photo)
        logger.info(
            "Photo moved",
            extra={
                "event": "album",
                "photo_id": photo.id,
                "from_album": source_id,
                "to_album": target.id,
            },
        )
        return photo

    # ============== Download ==============

    async def build_archive(self, album: Album) -> bytes:
        """
        ZIP of the album's photos in display order.
        Entries are named ``<n>_<stored filename>`` starting at 1; photos
        whose file is missing are skipped.
        """
        photos = await self.get_album_photos(album.id)
        entries = [
            (f"{index}_{photo.filename}", self.storage.resolve(photo.path))
            for index, photo in enumerate(photos, start=1)
        ]
        return await asyncio.to_thread(_write_zip, entries, album.id)


def _write_zip(entries, album_id: int) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_STORED) as archive:
        for arcname, source in entries:
            if not source.is_file():
                logger.warning(
                    "Photo file missing from archive",
                    extra={"event": "album", "album_id": album_id, "entry": arcname},
                )
                continue
            archive.write(source, arcname)
    return buffer.getvalue()


def _clean_description(description: Optional[str]) -> Optional[str]:
    if description is None or not description.strip():
        return None
    return description

"""
Albums router for album management.
"""
from typing import List
from urllib.parse import quote

from fastapi import APIRouter, Depends, status
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.album import (
    AlbumCount,
    AlbumCoverResponse,
    AlbumCoverUpdate,
    AlbumCreate,
    AlbumListItem,
    AlbumReorder,
    AlbumResponse,
    AlbumUpdate,
    AlbumWithPhotos,
    PhotoMove,
    PhotoMoveResponse,
)
from app.schemas.common import MessageResponse
from app.schemas.photo import PhotoResponse
from app.services.album import AlbumService
from app.utils.prometheus_metrics import (
    album_operations_total,
    reorder_operations_total,
)

router = APIRouter(prefix="/albums", tags=["Albums"])


@router.post(
    "/",
    response_model=AlbumResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new album",
)
async def create_album(
    album_data: AlbumCreate,
    db: AsyncSession = Depends(get_db),
) -> AlbumResponse:
    """
    Create a new photo album. It is placed after all existing albums.

    - **name**: Album name (required)
    - **description**: Optional album description
    """
    album_service = AlbumService(db)
    try:
        album = await album_service.create_album(album_data)
        album_operations_total.labels(operation="create", result="success").inc()
        return AlbumResponse.model_validate(album)
    except Exception:
        album_operations_total.labels(operation="create", result="failure").inc()
        raise


@router.get(
    "/",
    response_model=List[AlbumListItem],
    summary="List albums",
)
async def list_albums(db: AsyncSession = Depends(get_db)) -> List[AlbumListItem]:
    """
    All albums in their manual order, with photo counts and cover paths.
    """
    return await AlbumService(db).list_albums()


@router.delete(
    "/",
    response_model=MessageResponse,
    summary="Delete all albums",
)
async def delete_all_albums(db: AsyncSession = Depends(get_db)) -> MessageResponse:
    """
    Delete every album together with all photos and their files.
    """
    try:
        albums, photos = await AlbumService(db).delete_all_albums()
        album_operations_total.labels(operation="delete_all", result="success").inc()
    except Exception:
        album_operations_total.labels(operation="delete_all", result="failure").inc()
        raise
    return MessageResponse(message=f"{albums} album(s) and {photos} photo(s) deleted")


@router.get(
    "/count",
    response_model=AlbumCount,
    summary="Count albums",
)
async def count_albums(db: AsyncSession = Depends(get_db)) -> AlbumCount:
    """Total number of albums."""
    return AlbumCount(albums=await AlbumService(db).count_albums())


@router.post(
    "/reorder",
    response_model=MessageResponse,
    summary="Reorder albums",
)
async def reorder_albums(
    payload: AlbumReorder,
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    """
    Persist a new album order.

    - **albums**: list of `{id, order}`; every listed album gets exactly that order

    All values are written in one transaction. If any id is unknown the
    request fails with 404 and nothing changes.
    """
    try:
        updated = await AlbumService(db).reorder_albums(payload.albums)
        reorder_operations_total.labels(entity="album", result="success").inc()
    except Exception:
        reorder_operations_total.labels(entity="album", result="failure").inc()
        raise
    return MessageResponse(message=f"Album order updated ({updated})")


@router.patch(
    "/cover",
    response_model=AlbumCoverResponse,
    summary="Set album cover",
)
async def set_album_cover(
    payload: AlbumCoverUpdate,
    db: AsyncSession = Depends(get_db),
) -> AlbumCoverResponse:
    """
    Use one of the album's photos as its cover.

    - **photo_id**: photo inside the album
    - **album_id**: album to update
    """
    try:
        album = await AlbumService(db).set_cover(payload.album_id, payload.photo_id)
        album_operations_total.labels(operation="cover", result="success").inc()
    except Exception:
        album_operations_total.labels(operation="cover", result="failure").inc()
        raise
    return AlbumCoverResponse.model_validate(album)


@router.patch(
    "/move",
    response_model=PhotoMoveResponse,
    summary="Move a photo to another album",
)
async def move_photo(
    payload: PhotoMove,
    db: AsyncSession = Depends(get_db),
) -> PhotoMoveResponse:
    """
    Move a photo to the end of another album.

    - **photo_id**: photo to move
    - **target_album_id**: destination album
    """
    try:
        photo = await AlbumService(db).move_photo(payload.photo_id, payload.target_album_id)
        album_operations_total.labels(operation="move", result="success").inc()
    except Exception:
        album_operations_total.labels(operation="move", result="failure").inc()
        raise
    return PhotoMoveResponse(photo=PhotoResponse.model_validate(photo))


@router.get(
    "/{album_id}",
    response_model=AlbumWithPhotos,
    summary="Get album with photos",
)
async def get_album(
    album_id: int,
    db: AsyncSession = Depends(get_db),
) -> AlbumWithPhotos:
    """
    Get a specific album with all its photos in display order.

    - **album_id**: ID of the album to retrieve
    """
    album_service = AlbumService(db)
    album = await album_service.require_album(album_id)
    return await album_service.get_album_with_photos(album)


@router.put(
    "/{album_id}",
    response_model=AlbumResponse,
    summary="Rename album",
)
async def update_album(
    album_id: int,
    update_data: AlbumUpdate,
    db: AsyncSession = Depends(get_db),
) -> AlbumResponse:
    """
    Rename an album and replace its description.

    - **album_id**: ID of the album to update
    - **name**: New album name (required)
    - **description**: New description; blank or missing clears it
    """
    album_service = AlbumService(db)
    album = await album_service.require_album(album_id)
    try:
        updated = await album_service.update_album(album, update_data)
        album_operations_total.labels(operation="update", result="success").inc()
    except Exception:
        album_operations_total.labels(operation="update", result="failure").inc()
        raise
    return AlbumResponse.model_validate(updated)


@router.delete(
    "/{album_id}",
    response_model=MessageResponse,
    summary="Delete album",
)
async def delete_album(
    album_id: int,
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    """
    Delete an album, its photos and their files.
    """
    album_service = AlbumService(db)
    album = await album_service.require_album(album_id)
    try:
        photos = await album_service.delete_album(album)
        album_operations_total.labels(operation="delete", result="success").inc()
    except Exception:
        album_operations_total.labels(operation="delete", result="failure").inc()
        raise
    return MessageResponse(message=f"Album deleted with {photos} photo(s)")


@router.delete(
    "/{album_id}/photos",
    response_model=MessageResponse,
    summary="Clear album",
)
async def clear_album(
    album_id: int,
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    """
    Delete every photo of the album (rows and files). The album stays.
    """
    album_service = AlbumService(db)
    album = await album_service.require_album(album_id)
    try:
        photos = await album_service.clear_album(album)
        album_operations_total.labels(operation="clear", result="success").inc()
    except Exception:
        album_operations_total.labels(operation="clear", result="failure").inc()
        raise
    return MessageResponse(message=f"Album cleared, {photos} photo(s) deleted")


@router.get(
    "/{album_id}/download",
    summary="Download album as ZIP",
    response_class=Response,
)
async def download_album(
    album_id: int,
    db: AsyncSession = Depends(get_db),
) -> Response:
    """
    ZIP archive of the album's photos in display order.
    Entries are numbered from 1 so the order survives extraction.
    """
    album_service = AlbumService(db)
    album = await album_service.require_album(album_id)
    archive = await album_service.build_archive(album)
    album_operations_total.labels(operation="download", result="success").inc()

    archive_name = f"{album.name or f'album_{album.id}'}.zip"
    return Response(
        content=archive,
        media_type="application/zip",
        headers={
            "Content-Disposition": f"attachment; filename*=UTF-8''{quote(archive_name)}",
        },
    )

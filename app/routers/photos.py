"""
Photos router for photo management.
"""
import mimetypes
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.database import get_db
from app.schemas.common import MessageResponse
from app.schemas.photo import (
    AlbumPhotoCount,
    PhotoCount,
    PhotoDeleteResponse,
    PhotoReorder,
    PhotoResponse,
)
from app.services.album import AlbumService
from app.services.photo import FIT_MODES, PhotoService, render_expand_page
from app.utils.prometheus_metrics import (
    photo_operations_total,
    photo_upload_file_size_bytes,
    reorder_operations_total,
)

router = APIRouter(prefix="/photos", tags=["Photos"])

settings = get_settings()

# Allowed content types for photo upload
ALLOWED_CONTENT_TYPES = {
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
    "image/bmp",
    "image/svg+xml",
    "image/heic",
    "image/heif",
}

# File extension to content type mapping
EXTENSION_TO_CONTENT_TYPE = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".bmp": "image/bmp",
    ".svg": "image/svg+xml",
    ".heic": "image/heic",
    ".heif": "image/heif",
}


def guess_content_type(filename: str, provided_type: Optional[str] = None) -> Optional[str]:
    """
    Guess content type from filename or provided type.

    Args:
        filename: The filename
        provided_type: The content type provided by the client

    Returns:
        The content type, or the provided type if it cannot be determined
    """
    if provided_type and provided_type in ALLOWED_CONTENT_TYPES:
        return provided_type

    if filename:
        lowered = filename.lower()
        for ext, content_type in EXTENSION_TO_CONTENT_TYPE.items():
            if lowered.endswith(ext):
                return content_type

        guessed_type, _ = mimetypes.guess_type(filename)
        if guessed_type and guessed_type in ALLOWED_CONTENT_TYPES:
            return guessed_type

    return provided_type


@router.post(
    "/upload",
    response_model=PhotoResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a photo",
)
async def upload_photo(
    album_id: int = Form(..., description="Album to upload the photo to"),
    photo: UploadFile = File(..., description="Image file"),
    db: AsyncSession = Depends(get_db),
) -> PhotoResponse:
    """
    Upload a photo to the end of an album.

    - **album_id**: Album ID (required)
    - **photo**: Image file (JPEG, PNG, GIF, WebP, BMP, SVG, HEIC)

    The file is stored as `<epoch-ms>-<name>` in the upload directory and
    served from `/uploads/<file>`.
    """
    content = await photo.read()

    if len(content) > settings.max_upload_size:
        photo_operations_total.labels(operation="upload", result="rejected").inc()
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File too large. Maximum size: {settings.max_upload_size // (1024 * 1024)}MB",
        )

    content_type = guess_content_type(photo.filename or "", photo.content_type)
    if not content_type or content_type not in ALLOWED_CONTENT_TYPES:
        photo_operations_total.labels(operation="upload", result="rejected").inc()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"File type not allowed. Provided: {photo.content_type or 'unknown'}, "
                   f"Filename: {photo.filename or 'unknown'}",
        )

    if not content:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Uploaded file is empty",
        )

    album = await AlbumService(db).require_album(album_id)

    try:
        created = await PhotoService(db).upload_photo(
            album=album,
            file_content=content,
            filename=photo.filename or "photo",
            content_type=content_type,
        )
    except Exception:
        photo_operations_total.labels(operation="upload", result="failure").inc()
        raise

    photo_operations_total.labels(operation="upload", result="success").inc()
    photo_upload_file_size_bytes.observe(len(content))
    return PhotoResponse.model_validate(created)


@router.post(
    "/reorder",
    response_model=MessageResponse,
    summary="Reorder photos",
)
async def reorder_photos(
    payload: PhotoReorder,
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    """
    Persist a new photo order.

    - **photos**: list of `{id, order}`; ids must be positive integers

    Applied in one transaction; an unknown id fails the whole request with 404.
    """
    try:
        updated = await PhotoService(db).reorder_photos(payload.photos)
        reorder_operations_total.labels(entity="photo", result="success").inc()
    except Exception:
        reorder_operations_total.labels(entity="photo", result="failure").inc()
        raise
    return MessageResponse(message=f"Photo order updated ({updated})")


@router.get(
    "/count",
    response_model=PhotoCount,
    summary="Count photos",
)
async def count_photos(db: AsyncSession = Depends(get_db)) -> PhotoCount:
    """Total number of photos across all albums."""
    return PhotoCount(photos=await PhotoService(db).count_photos())


@router.get(
    "/count-by-album",
    response_model=AlbumPhotoCount,
    summary="Count photos in an album",
)
async def count_photos_by_album(
    album_id: int = Query(..., description="Album ID"),
    db: AsyncSession = Depends(get_db),
) -> AlbumPhotoCount:
    """Number of photos in one album. Unknown albums count zero."""
    return AlbumPhotoCount(photo_count=await PhotoService(db).count_by_album(album_id))


@router.delete(
    "/{photo_id}",
    response_model=PhotoDeleteResponse,
    summary="Delete photo",
)
async def delete_photo(
    photo_id: int,
    db: AsyncSession = Depends(get_db),
) -> PhotoDeleteResponse:
    """
    Delete a photo and its file.
    Albums that used it as cover fall back to their latest photo.
    """
    photo_service = PhotoService(db)
    photo = await photo_service.require_photo(photo_id)
    try:
        await photo_service.delete_photo(photo)
        photo_operations_total.labels(operation="delete", result="success").inc()
    except Exception:
        photo_operations_total.labels(operation="delete", result="failure").inc()
        raise
    return PhotoDeleteResponse(photo_id=photo_id)


@router.get(
    "/{photo_id}/expand",
    response_class=HTMLResponse,
    summary="Full-screen photo page",
)
async def expand_photo(
    photo_id: int,
    fit: str = Query("contain", description="object-fit: contain, cover or fill"),
    db: AsyncSession = Depends(get_db),
) -> HTMLResponse:
    """
    Standalone page that shows one photo on a black background.
    """
    if fit not in FIT_MODES:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"fit must be one of: {', '.join(FIT_MODES)}",
        )
    photo = await PhotoService(db).require_photo(photo_id)
    return HTMLResponse(render_expand_page(photo.path, fit))

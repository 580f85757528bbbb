"""
Pydantic schemas package.
All schemas are exported here for easy import.
"""
from app.schemas.photo import (
    PhotoResponse,
    PhotoSummary,
    PhotoDeleteResponse,
    PhotoOrderItem,
    PhotoReorder,
    PhotoCount,
    AlbumPhotoCount,
)
from app.schemas.album import (
    AlbumCreate,
    AlbumUpdate,
    AlbumResponse,
    AlbumListItem,
    AlbumWithPhotos,
    AlbumOrderItem,
    AlbumReorder,
    AlbumCoverUpdate,
    AlbumCoverResponse,
    PhotoMove,
    PhotoMoveResponse,
    AlbumCount,
)
from app.schemas.theme import (
    ThemeName,
    ThemeResponse,
    ThemeUpdate,
    ThemeSaved,
)
from app.schemas.common import MessageResponse, DirSizeResponse

__all__ = [
    # Photo schemas
    "PhotoResponse",
    "PhotoSummary",
    "PhotoDeleteResponse",
    "PhotoOrderItem",
    "PhotoReorder",
    "PhotoCount",
    "AlbumPhotoCount",
    # Album schemas
    "AlbumCreate",
    "AlbumUpdate",
    "AlbumResponse",
    "AlbumListItem",
    "AlbumWithPhotos",
    "AlbumOrderItem",
    "AlbumReorder",
    "AlbumCoverUpdate",
    "AlbumCoverResponse",
    "PhotoMove",
    "PhotoMoveResponse",
    "AlbumCount",
    # Theme schemas
    "ThemeName",
    "ThemeResponse",
    "ThemeUpdate",
    "ThemeSaved",
    # Common
    "MessageResponse",
    "DirSizeResponse",
]

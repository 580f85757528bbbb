"""
Services package.
Contains business logic and the filesystem/remote integrations.
"""
from app.services.local_storage import LocalStorageService
from app.services.photo import PhotoService
from app.services.album import AlbumService
from app.services.theme import ThemeService
from app.services.proxy import ImageProxyService

__all__ = [
    "LocalStorageService",
    "PhotoService",
    "AlbumService",
    "ThemeService",
    "ImageProxyService",
]

"""
Client-side pieces of the photo albums app: the HTTP client and the
interaction models behind drag-and-drop reordering, drop intake, the
pan/zoom viewer, album search and local preferences.
"""
from app.client.api import AlbumsClient
from app.client.preferences import Preferences, PreferencesStore
from app.client.reorder import ReorderController, ReorderError
from app.client.search import AlbumSearch, filter_albums
from app.client.zoom_pan import ZoomPanState

__all__ = [
    "AlbumsClient",
    "AlbumSearch",
    "Preferences",
    "PreferencesStore",
    "ReorderController",
    "ReorderError",
    "ZoomPanState",
    "filter_albums",
]

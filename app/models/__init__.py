"""
Database models package.
All models are exported here for easy import.
"""
from app.models.album import Album
from app.models.photo import Photo
from app.models.theme import AppTheme

__all__ = ["Album", "Photo", "AppTheme"]

"""
Photo-related Pydantic schemas for request/response validation.
"""
from datetime import datetime
from typing import List

from pydantic import BaseModel, Field, ConfigDict, StrictInt


class PhotoSummary(BaseModel):
    """Photo as listed inside an album."""

    id: int
    path: str
    order: int

    model_config = ConfigDict(from_attributes=True)


class PhotoResponse(PhotoSummary):
    """Schema for photo response."""

    album_id: int
    original_filename: str
    content_type: str
    file_size: int
    created_at: datetime


class PhotoDeleteResponse(BaseModel):
    """Schema for photo deletion response."""

    message: str = "Photo deleted"
    photo_id: int


class PhotoOrderItem(BaseModel):
    """New position of one photo."""

    id: int = Field(..., gt=0)
    order: StrictInt


class PhotoReorder(BaseModel):
    """Schema for reordering photos; orders are written as given."""

    photos: List[PhotoOrderItem]


class PhotoCount(BaseModel):
    """Total number of photos."""

    photos: int


class AlbumPhotoCount(BaseModel):
    """Number of photos in one album."""

    photo_count: int

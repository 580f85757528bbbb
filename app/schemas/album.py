"""
Album-related Pydantic schemas for request/response validation.
"""
from datetime import datetime
from typing import Optional, List

from pydantic import BaseModel, Field, ConfigDict, StrictInt, field_validator

from app.schemas.photo import PhotoResponse, PhotoSummary


class AlbumBase(BaseModel):
    """Base schema with common album attributes."""

    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Album name is required")
        return v


class AlbumCreate(AlbumBase):
    """Schema for album creation."""

    pass


class AlbumUpdate(AlbumBase):
    """Schema for renaming an album and replacing its description."""

    pass


class AlbumResponse(AlbumBase):
    """Schema for album response."""

    id: int
    order: int
    cover_photo_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AlbumListItem(BaseModel):
    """Album card on the albums page."""

    id: int
    name: str
    description: Optional[str] = None
    order: int
    photo_count: int = 0
    cover_photo_id: Optional[int] = None
    cover_photo_path: Optional[str] = None


class AlbumWithPhotos(AlbumResponse):
    """Schema for album response with photos included."""

    photo_count: int = 0
    photos: List[PhotoSummary] = []


class AlbumOrderItem(BaseModel):
    """New position of one album."""

    id: int = Field(..., gt=0)
    order: StrictInt


class AlbumReorder(BaseModel):
    """Schema for reordering albums; orders are written as given."""

    albums: List[AlbumOrderItem]


class AlbumCoverUpdate(BaseModel):
    """Schema for choosing an album cover."""

    photo_id: int = Field(..., gt=0)
    album_id: int = Field(..., gt=0)


class AlbumCoverResponse(BaseModel):
    """Album fields touched by a cover change."""

    id: int
    name: str
    cover_photo_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class PhotoMove(BaseModel):
    """Schema for moving a photo to another album."""

    photo_id: int = Field(..., gt=0)
    target_album_id: int = Field(..., gt=0)


class PhotoMoveResponse(BaseModel):
    """Schema for photo move response."""

    message: str = "Photo moved"
    photo: PhotoResponse


class AlbumCount(BaseModel):
    """Total number of albums."""

    albums: int

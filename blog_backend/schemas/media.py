"""Pydantic schemas for Media."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from blog_backend.models.media import MediaType


class MediaItem(BaseModel):
    file_url: str = Field(..., min_length=1, max_length=500)
    type: MediaType


class MediaCreate(MediaItem):
    post_id: int = Field(..., gt=0)


class MediaBulkCreate(BaseModel):
    post_id: int = Field(..., gt=0)
    media: List[MediaItem] = Field(..., min_length=1)


class MediaUpdate(BaseModel):
    file_url: Optional[str] = Field(None, min_length=1, max_length=500)
    type: Optional[MediaType] = None


class MediaResponse(BaseModel):
    id: int
    post_id: int
    file_url: str
    type: MediaType
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

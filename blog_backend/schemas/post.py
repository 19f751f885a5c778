"""Pydantic schemas for Post."""

from datetime import datetime, timezone
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from blog_backend.models.post import PostStatus
from blog_backend.schemas.category import CategorySummary
from blog_backend.schemas.tag import TagSummary
from blog_backend.schemas.user import UserSummary


def _to_naive_utc(v: Optional[datetime]) -> Optional[datetime]:
    # Columns store naive UTC
    if v is not None and v.tzinfo is not None:
        return v.astimezone(timezone.utc).replace(tzinfo=None)
    return v


class PostBase(BaseModel):
    """Base schema for Post."""
    title: str = Field(..., min_length=5, max_length=100, description="Post title")
    content: str = Field(..., min_length=10, description="Post body")
    status: PostStatus = PostStatus.DRAFT
    publish_at: Optional[datetime] = Field(None, description="Publication time; future times hide a published post")


class PostCreate(PostBase):
    """Schema for creating a new post."""
    tags: List[int] = Field(default_factory=list, description="Tag IDs")
    categories: List[int] = Field(default_factory=list, description="Category IDs")

    @field_validator("publish_at")
    @classmethod
    def normalize_publish_at(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _to_naive_utc(v)


class PostUpdate(BaseModel):
    """Schema for updating a post. Omitted fields are left unchanged."""
    title: Optional[str] = Field(None, min_length=5, max_length=100)
    content: Optional[str] = Field(None, min_length=10)
    status: Optional[PostStatus] = None
    publish_at: Optional[datetime] = None
    tags: Optional[List[int]] = None
    categories: Optional[List[int]] = None

    @field_validator("publish_at")
    @classmethod
    def normalize_publish_at(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _to_naive_utc(v)


class PostFilter(BaseModel):
    """Query filters for listing posts."""
    status: Optional[PostStatus] = None
    tag_id: Optional[int] = None
    category_id: Optional[int] = None
    user_id: Optional[int] = None
    search: Optional[str] = None


class PostResponse(PostBase):
    """Schema for Post response."""
    id: int
    user_id: int
    author: Optional[UserSummary] = None
    tags: List[TagSummary] = []
    categories: List[CategorySummary] = []
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

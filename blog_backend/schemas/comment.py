"""Pydantic schemas for Comment."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from blog_backend.schemas.user import UserSummary


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1, description="Comment content cannot be empty")
    post_id: int = Field(..., gt=0)
    parent_id: Optional[int] = Field(None, gt=0, description="Parent comment ID for replies")


class CommentUpdate(BaseModel):
    content: str = Field(..., min_length=1)


class CommentResponse(BaseModel):
    id: int
    content: str
    post_id: int
    user_id: int
    parent_id: Optional[int] = None
    author: Optional[UserSummary] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CommentDetailResponse(CommentResponse):
    """Comment with its direct replies."""
    replies: List[CommentResponse] = []

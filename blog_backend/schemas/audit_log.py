"""Pydantic schemas for AuditLog."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict

from blog_backend.models.audit_log import EntityType
from blog_backend.schemas.user import UserSummary


class AuditLogResponse(BaseModel):
    id: int
    user_id: int
    action: str
    entity_type: Optional[EntityType] = None
    entity_id: Optional[int] = None
    timestamp: datetime
    user: Optional[UserSummary] = None

    model_config = ConfigDict(from_attributes=True)

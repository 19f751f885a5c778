"""Append-only audit trail."""

from enum import Enum

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index, Enum as SQLEnum
from sqlalchemy.orm import relationship
from ..database import Base, utcnow


class EntityType(str, Enum):
    """Entity kinds referenced by audit records and reactions."""
    USER = "User"
    POST = "Post"
    COMMENT = "Comment"
    TAG = "Tag"
    CATEGORY = "Category"
    REACTION = "Reaction"
    MEDIA = "Media"


class AuditLog(Base):
    
    __tablename__ = "audit_logs"
    
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, 
        ForeignKey("users.id", ondelete="CASCADE"), 
        nullable=False, 
        index=True
    )
    action = Column(String(50), nullable=False)
    entity_type = Column(SQLEnum(EntityType, name="audit_entity_type"), nullable=True)
    entity_id = Column(Integer, nullable=True)
    timestamp = Column(DateTime, default=utcnow, nullable=False, index=True)
    
    __table_args__ = (
        Index('idx_audit_entity', 'entity_type', 'entity_id', 'timestamp'),
    )
    
    user = relationship("User")

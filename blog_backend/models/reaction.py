"""Reaction model: one reaction per user per post or comment."""

from enum import Enum

from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint, Index, Enum as SQLEnum
from sqlalchemy.orm import relationship
from ..database import Base, utcnow
from .audit_log import EntityType


class ReactionType(str, Enum):
    LIKE = "LIKE"
    LOVE = "LOVE"
    HAHA = "HAHA"
    WOW = "WOW"
    SAD = "SAD"
    ANGRY = "ANGRY"
    DISLIKE = "DISLIKE"


class Reaction(Base):
    
    __tablename__ = "reactions"
    
    id = Column(Integer, primary_key=True, index=True)
    
    user_id = Column(
        Integer, 
        ForeignKey("users.id", ondelete="CASCADE"), 
        nullable=False, 
        index=True
    )
    
    # Polymorphic target, no foreign key
    entity_type = Column(SQLEnum(EntityType, name="entity_type"), nullable=False)
    entity_id = Column(Integer, nullable=False)
    
    reaction = Column(SQLEnum(ReactionType, name="reaction_type"), nullable=False)
    
    created_at = Column(DateTime, default=utcnow, nullable=False)
    
    __table_args__ = (
        # One reaction per user per entity; toggling depends on it
        UniqueConstraint('user_id', 'entity_type', 'entity_id', name='uq_reaction_user_entity'),
        Index('idx_reaction_entity', 'entity_type', 'entity_id'),
    )
    
    user = relationship("User")

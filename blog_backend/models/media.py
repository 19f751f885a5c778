"""Media attached to a post."""

from enum import Enum

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from ..database import Base, utcnow


class MediaType(str, Enum):
    IMAGE = "IMAGE"
    VIDEO = "VIDEO"
    AUDIO = "AUDIO"
    DOCUMENT = "DOCUMENT"


class Media(Base):
    
    __tablename__ = "media"
    
    id = Column(Integer, primary_key=True, index=True)
    post_id = Column(
        Integer, 
        ForeignKey("posts.id", ondelete="CASCADE"), 
        nullable=False, 
        index=True
    )
    file_url = Column(String(500), nullable=False)
    type = Column(SQLEnum(MediaType, name="media_type"), nullable=False, index=True)
    
    created_at = Column(DateTime, default=utcnow, nullable=False)
    
    post = relationship("Post", back_populates="media")

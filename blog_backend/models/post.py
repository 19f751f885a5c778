"""Post model for blog articles."""

from enum import Enum
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index, Enum as SQLEnum
from sqlalchemy.orm import relationship
from ..database import Base, utcnow
from .tag import post_tags
from .category import post_categories


class PostStatus(str, Enum):
    """Publication lifecycle of a post."""
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    SCHEDULED = "SCHEDULED"


class Post(Base):
    """Blog article owned by its author."""
    
    __tablename__ = "posts"
    
    id = Column(Integer, primary_key=True, index=True)
    
    # Foreign Keys
    user_id = Column(
        Integer, 
        ForeignKey("users.id", ondelete="CASCADE"), 
        nullable=False, 
        index=True
    )
    
    # Post Content
    title = Column(String(100), nullable=False)
    content = Column(Text, nullable=False)
    status = Column(
        SQLEnum(PostStatus, name="post_status"),
        nullable=False,
        default=PostStatus.DRAFT,
        index=True
    )
    publish_at = Column(DateTime, nullable=True)  # naive UTC
    
    # Timestamps
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
    
    # Constraints & Indexes
    __table_args__ = (
        Index('idx_post_user_created', 'user_id', 'created_at'),
        Index('idx_post_status_publish', 'status', 'publish_at'),
    )
    
    # Relationships
    author = relationship("User", back_populates="posts")
    tags = relationship("Tag", secondary=post_tags, back_populates="posts", order_by="Tag.name")
    categories = relationship(
        "Category", secondary=post_categories, back_populates="posts", order_by="Category.name"
    )
    comments = relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
    )
    media = relationship(
        "Media",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="Media.id",
    )

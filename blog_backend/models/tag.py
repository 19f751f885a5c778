"""Tag model and the post <-> tag association table."""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Table, select, func
from sqlalchemy.orm import relationship, column_property
from ..database import Base, utcnow


post_tags = Table(
    "post_tags",
    Base.metadata,
    Column("post_id", Integer, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


class Tag(Base):
    """Free-form label attached to posts."""
    
    __tablename__ = "tags"
    
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    
    # Timestamps
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
    
    posts_count = column_property(
        select(func.count(post_tags.c.post_id))
        .where(post_tags.c.tag_id == id)
        .correlate_except(post_tags)
        .scalar_subquery()
    )
    
    # Relationships
    posts = relationship("Post", secondary=post_tags, back_populates="tags")

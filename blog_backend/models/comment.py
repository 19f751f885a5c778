"""Comment model; replies reference their parent comment."""

from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from ..database import Base, utcnow


class Comment(Base):
    
    __tablename__ = "comments"
    
    id = Column(Integer, primary_key=True, index=True)
    
    # Foreign Keys
    post_id = Column(
        Integer, 
        ForeignKey("posts.id", ondelete="CASCADE"), 
        nullable=False, 
        index=True
    )
    user_id = Column(
        Integer, 
        ForeignKey("users.id", ondelete="CASCADE"), 
        nullable=False, 
        index=True
    )
    parent_id = Column(
        Integer, 
        ForeignKey("comments.id", ondelete="CASCADE"), 
        nullable=True, 
        index=True
    )  # one level of replies only
    
    content = Column(Text, nullable=False)
    
    # Timestamps
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
    
    __table_args__ = (
        Index('idx_comment_post_created', 'post_id', 'created_at'),
    )
    
    # Relationships
    post = relationship("Post", back_populates="comments")
    author = relationship("User", back_populates="comments")
    parent = relationship("Comment", remote_side=[id], back_populates="replies")
    replies = relationship(
        "Comment",
        back_populates="parent",
        cascade="all, delete-orphan",
        order_by="Comment.created_at.asc()",
    )

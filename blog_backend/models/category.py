"""Category model and the post <-> category association table."""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Table, select, func
from sqlalchemy.orm import relationship, column_property
from ..database import Base, utcnow


post_categories = Table(
    "post_categories",
    Base.metadata,
    Column("post_id", Integer, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", Integer, ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)


class Category(Base):
    """Editorial section a post is filed under."""
    
    __tablename__ = "categories"
    
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    
    # Timestamps
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
    
    posts_count = column_property(
        select(func.count(post_categories.c.post_id))
        .where(post_categories.c.category_id == id)
        .correlate_except(post_categories)
        .scalar_subquery()
    )
    
    # Relationships
    posts = relationship("Post", secondary=post_categories, back_populates="categories")

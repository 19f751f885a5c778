"""
SQLAlchemy Models for the blog backend
"""

from ..database import Base
from .user import User, UserRole
from .tag import Tag, post_tags
from .category import Category, post_categories
from .post import Post, PostStatus
from .comment import Comment
from .audit_log import AuditLog, EntityType
from .reaction import Reaction, ReactionType
from .media import Media, MediaType

# Export all models
__all__ = [
    "Base",
    "User",
    "UserRole",
    "Tag",
    "post_tags",
    "Category",
    "post_categories",
    "Post",
    "PostStatus",
    "Comment",
    "AuditLog",
    "EntityType",
    "Reaction",
    "ReactionType",
    "Media",
    "MediaType",
]

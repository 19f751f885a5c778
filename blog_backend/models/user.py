"""User model: blog authors, commenters and administrators."""

from enum import Enum

from sqlalchemy import Column, Integer, String, Text, DateTime, Enum as SQLEnum
from sqlalchemy.orm import relationship
from ..database import Base, utcnow


class UserRole(str, Enum):
    """Roles understood by the authorization policy."""
    USER = "USER"
    ADMIN = "ADMIN"


class User(Base):
    __tablename__ = "users"
    
    # Primary Key
    id = Column(Integer, primary_key=True, index=True)
    
    # Authentication & Contact
    name = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)  # stored lower-case
    password_hash = Column(String(255), nullable=False)
    phone = Column(String(20), nullable=True)
    
    # Role & Authorization
    role = Column(
        SQLEnum(UserRole, name="user_role"),
        nullable=False,
        default=UserRole.USER,
        index=True
    )
    
    # Profile
    bio = Column(Text, nullable=True)
    profile_picture = Column(String(500), nullable=True)
    
    # Timestamps
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
    
    # Relationships
    posts = relationship("Post", back_populates="author")
    comments = relationship("Comment", back_populates="author")

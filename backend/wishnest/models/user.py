"""
User Model - Identity Store

Purpose: Stable identity for wishlist owners, friends and reservers.

Key Fields:
- `username`: unique handle, stored lowercased, never contains '@'
- `email`: unique, stored lowercased
- `password_hash`: never leaves the backend
"""
from sqlalchemy import Column, String, DateTime
from datetime import datetime, UTC
import uuid

from .database import Base


class User(Base):
    """User model for authentication and profile"""
    __tablename__ = "users"

    # Primary key
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Profile
    name = Column(String(255), nullable=False)
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    avatar_url = Column(String(500), nullable=True)

    # Authentication
    password_hash = Column(String(255), nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)

    def to_dict(self):
        """Convert to dictionary for the owner's own view (no password hash)"""
        return {
            "id": self.id,
            "name": self.name,
            "username": self.username,
            "email": self.email,
            "avatar_url": self.avatar_url,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def to_public_dict(self):
        """Convert to public dictionary (no sensitive info)"""
        return {
            "id": self.id,
            "name": self.name,
            "username": self.username,
            "avatar_url": self.avatar_url,
        }

    def __repr__(self):
        return f"<User {self.username}>"

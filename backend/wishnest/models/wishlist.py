"""
Wishlist Model - One wishlist per user (1:1)

Created lazily on first access by its owner.
"""
from sqlalchemy import Column, String, DateTime, Boolean, ForeignKey
from datetime import datetime, UTC
import uuid

from .database import Base
from wishnest.config.constants import DEFAULT_WISHLIST_TITLE, DEFAULT_WISHLIST_DESCRIPTION


class Wishlist(Base):
    """A user's single wishlist"""
    __tablename__ = "wishlists"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Unique owner enforces one wishlist per user
    user_id = Column(String(36), ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True, index=True)

    title = Column(String(100), nullable=False, default=DEFAULT_WISHLIST_TITLE)
    description = Column(String(500), nullable=False, default=DEFAULT_WISHLIST_DESCRIPTION)

    # Reserved for later, not used by any operation
    is_archived = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), onupdate=lambda: datetime.now(UTC))

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "description": self.description,
            "is_archived": self.is_archived,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def to_meta_dict(self):
        """Friend-facing metadata only"""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<Wishlist {self.title!r} user={self.user_id[:8]}>"

"""
Database Models Package

This module exports all SQLAlchemy models for the WishNest backend.

Tables:
1. users - Identity store
2. friendships - One undirected edge per user pair (pending/accepted/rejected)
3. wishlists - Exactly one wishlist per user
4. items - Wishlist items with an embedded alternate and a reservation slot
"""

from .database import (
    engine,
    AsyncSessionLocal,
    Base,
    init_db,
    reset_db,
    get_db,
)

from .user import User
from .friendship import Friendship, FriendshipStatus, FriendPair
from .wishlist import Wishlist
from .item import Item, Alternate, Free, Reserved, ReservationState, FREE

__all__ = [
    # Database utilities
    "engine",
    "AsyncSessionLocal",
    "Base",
    "init_db",
    "reset_db",
    "get_db",

    # Models
    "User",
    "Friendship",
    "FriendshipStatus",
    "FriendPair",
    "Wishlist",
    "Item",

    # Value types
    "Alternate",
    "Free",
    "Reserved",
    "ReservationState",
    "FREE",
]

"""
Schemas Package

Pydantic models for API request and response bodies.
"""

from wishnest.schemas.user import (
    SignupRequest,
    LoginRequest,
    PublicUser,
    UserResponse,
    AuthResponse,
)
from wishnest.schemas.friendship import (
    FriendshipResponse,
    FriendRequestResponse,
    FriendshipActionResponse,
    FriendsListResponse,
    PendingRequest,
    RequestsListResponse,
)
from wishnest.schemas.wishlist import (
    WishlistUpdateRequest,
    WishlistResponse,
    WishlistEnvelope,
    WishlistMetaEnvelope,
    MessageResponse,
)
from wishnest.schemas.item import ItemPayload

__all__ = [
    "SignupRequest",
    "LoginRequest",
    "PublicUser",
    "UserResponse",
    "AuthResponse",
    "FriendshipResponse",
    "FriendRequestResponse",
    "FriendshipActionResponse",
    "FriendsListResponse",
    "PendingRequest",
    "RequestsListResponse",
    "WishlistUpdateRequest",
    "WishlistResponse",
    "WishlistEnvelope",
    "WishlistMetaEnvelope",
    "ItemPayload",
    "MessageResponse",
]

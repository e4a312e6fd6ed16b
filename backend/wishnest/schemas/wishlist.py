from typing import Optional
from pydantic import BaseModel


class WishlistUpdateRequest(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None


class WishlistResponse(BaseModel):
    id: str
    user_id: str
    title: str
    description: str
    is_archived: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class WishlistEnvelope(BaseModel):
    wishlist: WishlistResponse


class WishlistMeta(BaseModel):
    id: str
    title: str
    description: str
    updated_at: Optional[str] = None


class WishlistMetaEnvelope(BaseModel):
    wishlist: WishlistMeta


class MessageResponse(BaseModel):
    message: str

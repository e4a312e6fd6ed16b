"""
Wishlist API - The caller's own wishlist and friend-facing metadata

Endpoints:
- GET    /wishlist                       get (lazily created with defaults)
- PATCH  /wishlist                       update title / description
- DELETE /wishlist                       delete wishlist and all of its items
- GET    /wishlist/users/{user_id}/meta  another user's wishlist metadata
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from wishnest.api.deps import get_current_user
from wishnest.models.database import get_db
from wishnest.models.user import User
from wishnest.schemas.wishlist import (
    WishlistUpdateRequest,
    WishlistResponse,
    WishlistEnvelope,
    WishlistMeta,
    WishlistMetaEnvelope,
    MessageResponse,
)
from wishnest.services.wishlist_service import wishlist_service

router = APIRouter()


@router.get("/wishlist", response_model=WishlistEnvelope)
async def get_wishlist(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    wishlist = await wishlist_service.get_or_create(db, current_user.id)
    return WishlistEnvelope(wishlist=WishlistResponse(**wishlist.to_dict()))


@router.patch("/wishlist", response_model=WishlistEnvelope)
async def update_wishlist(
    request: WishlistUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    wishlist = await wishlist_service.update(db, current_user.id, request.model_dump(exclude_unset=True))
    return WishlistEnvelope(wishlist=WishlistResponse(**wishlist.to_dict()))


@router.delete("/wishlist", response_model=MessageResponse)
async def delete_wishlist(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await wishlist_service.delete(db, current_user.id)
    return MessageResponse(message="Wishlist deleted")


@router.get("/wishlist/users/{user_id}/meta", response_model=WishlistMetaEnvelope)
async def get_wishlist_meta(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    wishlist = await wishlist_service.get_meta_for_viewer(db, current_user.id, user_id)
    return WishlistMetaEnvelope(wishlist=WishlistMeta(**wishlist.to_meta_dict()))

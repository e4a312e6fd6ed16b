"""
Items API - Wishlist items and reservations

The owner's views never carry reservation fields; friends always see
`is_reserved` plus the reserver and timestamp when reserved.

Endpoints:
- POST   /wishlist/items                    create (owner)
- GET    /wishlist/items                    list own items, newest first
- GET    /wishlist/users/{user_id}/items    list another user's items (friends)
- PATCH  /wishlist/items/{item_id}          partial update (owner)
- DELETE /wishlist/items/{item_id}          delete (owner)
- POST   /wishlist/items/{item_id}/reserve
- POST   /wishlist/items/{item_id}/unreserve
"""
from typing import Any, Dict
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from wishnest.api.deps import get_current_user
from wishnest.models.database import get_db
from wishnest.models.user import User
from wishnest.models.item import Item
from wishnest.schemas.item import ItemPayload
from wishnest.schemas.wishlist import MessageResponse
from wishnest.services.item_service import item_service
from wishnest.services.reservation_service import reservation_service

router = APIRouter()


def _item_view(item: Item, viewer_id: str, owner_id: str) -> Dict[str, Any]:
    """Owner view is redacted; everyone else gets the reservation slot."""
    return item.to_dict(include_reservation=viewer_id != owner_id)


@router.post("/wishlist/items", status_code=201)
async def create_item(
    request: ItemPayload,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    item = await item_service.create_item(db, current_user.id, request.model_dump(exclude_unset=True))
    return {"item": item.to_dict(include_reservation=False)}


@router.get("/wishlist/items")
async def list_items(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    items = await item_service.list_items(db, current_user.id)
    return {"items": [item.to_dict(include_reservation=False) for item in items]}


@router.get("/wishlist/users/{user_id}/items")
async def list_items_for_user(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    items = await item_service.list_items_for_viewer(db, current_user.id, user_id)
    return {"items": [_item_view(item, current_user.id, user_id) for item in items]}


@router.patch("/wishlist/items/{item_id}")
async def update_item(
    item_id: str,
    request: ItemPayload,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    item = await item_service.update_item(db, current_user.id, item_id, request.model_dump(exclude_unset=True))
    return {"item": item.to_dict(include_reservation=False)}


@router.delete("/wishlist/items/{item_id}", response_model=MessageResponse)
async def delete_item(
    item_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await item_service.delete_item(db, current_user.id, item_id)
    return MessageResponse(message="Item deleted")


@router.post("/wishlist/items/{item_id}/reserve")
async def reserve_item(
    item_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    item, owner_id = await reservation_service.reserve(db, current_user.id, item_id)
    return {"message": "Item reserved", "item": _item_view(item, current_user.id, owner_id)}


@router.post("/wishlist/items/{item_id}/unreserve")
async def unreserve_item(
    item_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    item, owner_id = await reservation_service.unreserve(db, current_user.id, item_id)
    return {"message": "Item unreserved", "item": _item_view(item, current_user.id, owner_id)}

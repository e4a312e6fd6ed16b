"""
Friends API - Friend requests and the friends list

Endpoints:
- POST   /friends/request/{user_id}     send (201) or re-send after a rejection (200)
- POST   /friends/accept/{request_id}   recipient accepts a pending request
- POST   /friends/reject/{request_id}   recipient rejects a pending request
- DELETE /friends/remove/{user_id}      drop the relationship, whatever its status
- GET    /friends/list                  accepted friends
- GET    /friends/requests              pending requests, incoming and outgoing
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from wishnest.api.deps import get_current_user
from wishnest.models.database import get_db
from wishnest.models.user import User
from wishnest.schemas.user import PublicUser
from wishnest.schemas.friendship import (
    FriendshipResponse,
    FriendRequestResponse,
    FriendshipActionResponse,
    FriendsListResponse,
    PendingRequest,
    RequestsListResponse,
)
from wishnest.schemas.wishlist import MessageResponse
from wishnest.services.friendship_service import friendship_service

router = APIRouter()


@router.post("/friends/request/{user_id}", response_model=FriendRequestResponse, status_code=201)
async def send_request(
    user_id: str,
    response: Response,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    edge, created = await friendship_service.send_request(db, current_user.id, user_id)
    if not created:
        response.status_code = status.HTTP_200_OK
    return FriendRequestResponse(
        message="Friend request sent" if created else "Friend request re-sent",
        request=FriendshipResponse(**edge.to_dict()),
    )


@router.post("/friends/accept/{request_id}", response_model=FriendshipActionResponse)
async def accept_request(
    request_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    edge = await friendship_service.accept_request(db, current_user.id, request_id)
    return FriendshipActionResponse(
        message="Friend request accepted",
        friendship=FriendshipResponse(**edge.to_dict()),
    )


@router.post("/friends/reject/{request_id}", response_model=FriendshipActionResponse)
async def reject_request(
    request_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    edge = await friendship_service.reject_request(db, current_user.id, request_id)
    return FriendshipActionResponse(
        message="Friend request rejected",
        friendship=FriendshipResponse(**edge.to_dict()),
    )


@router.delete("/friends/remove/{user_id}", response_model=MessageResponse)
async def remove_friend(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await friendship_service.remove(db, current_user.id, user_id)
    return MessageResponse(message="Relationship removed")


@router.get("/friends/list", response_model=FriendsListResponse)
async def list_friends(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    friends = await friendship_service.list_friends(db, current_user.id)
    return FriendsListResponse(friends=[PublicUser(**u.to_public_dict()) for u in friends])


@router.get("/friends/requests", response_model=RequestsListResponse)
async def list_requests(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    grouped = await friendship_service.list_requests(db, current_user.id)

    def _entry(edge, other: User) -> PendingRequest:
        return PendingRequest(
            id=edge.id,
            other_user_id=other.id,
            other_user=PublicUser(**other.to_public_dict()),
            status=edge.status,
            created_at=edge.created_at.isoformat() if edge.created_at else None,
            updated_at=edge.updated_at.isoformat() if edge.updated_at else None,
        )

    return RequestsListResponse(
        incoming=[_entry(edge, other) for edge, other in grouped["incoming"]],
        outgoing=[_entry(edge, other) for edge, other in grouped["outgoing"]],
    )

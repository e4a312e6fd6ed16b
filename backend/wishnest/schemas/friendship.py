from typing import List, Optional
from pydantic import BaseModel

from wishnest.schemas.user import PublicUser


class FriendshipResponse(BaseModel):
    id: str
    participants: List[str]
    requester_id: str
    status: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class FriendRequestResponse(BaseModel):
    message: str
    request: FriendshipResponse


class FriendshipActionResponse(BaseModel):
    message: str
    friendship: FriendshipResponse


class FriendsListResponse(BaseModel):
    friends: List[PublicUser]


class PendingRequest(BaseModel):
    id: str
    other_user_id: str
    other_user: PublicUser
    status: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class RequestsListResponse(BaseModel):
    incoming: List[PendingRequest] = []
    outgoing: List[PendingRequest] = []

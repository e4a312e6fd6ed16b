"""
Visibility Policy

Decides whether an actor may see and act on an owner's wishlist and items:
the owner always may, anyone else only with an accepted friendship.
Computed fresh from the friendships table on every call.
"""
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wishnest.models.friendship import Friendship, FriendPair, FriendshipStatus
from wishnest.services.exceptions import NotFriendsError

logger = logging.getLogger(__name__)


async def are_friends(db: AsyncSession, user_a_id: str, user_b_id: str) -> bool:
    if not user_a_id or not user_b_id or user_a_id == user_b_id:
        return False

    pair = FriendPair.of(user_a_id, user_b_id)
    result = await db.execute(
        select(Friendship.id).where(
            Friendship.user_low_id == pair.low,
            Friendship.user_high_id == pair.high,
            Friendship.status == FriendshipStatus.ACCEPTED,
        )
    )
    return result.scalar_one_or_none() is not None


async def can_view(db: AsyncSession, actor_id: str, owner_id: str) -> bool:
    if actor_id == owner_id:
        return True
    return await are_friends(db, actor_id, owner_id)


async def ensure_can_view(db: AsyncSession, actor_id: str, owner_id: str) -> None:
    """
    Raises:
        NotFriendsError if actor is neither the owner nor an accepted friend
    """
    if not await can_view(db, actor_id, owner_id):
        logger.warning(f"User {actor_id} denied access to wishlist of {owner_id}")
        raise NotFriendsError()

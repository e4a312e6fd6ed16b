"""
Friendship Service - Friend requests and the friendship graph

Encapsulates logic for:
- Sending / re-sending friend requests
- Accepting / rejecting requests (recipient only)
- Removing a relationship at any status (either participant)
- Listing friends and pending requests

Every transition on an existing edge is a single conditional UPDATE or
DELETE; a zero row count means another request changed the edge first.
"""
from typing import Dict, List, Optional, Tuple
import logging

from sqlalchemy import select, update, delete, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from wishnest.models.friendship import Friendship, FriendPair, FriendshipStatus
from wishnest.models.user import User
from wishnest.services.user_service import user_service
from wishnest.services.metrics import friendship_transitions
from wishnest.services.exceptions import (
    WishNestError,
    ConflictError,
    InvalidTargetError,
    UnknownTargetError,
    AlreadyFriendsError,
    RequestAlreadyPendingError,
    NotPendingError,
    NotRecipientError,
    RequestNotFoundError,
    RelationshipNotFoundError,
)

logger = logging.getLogger(__name__)


def _outcome(error: WishNestError) -> str:
    return error.kind.value


class FriendshipService:
    """Service for managing friendship edges."""

    @staticmethod
    async def get_edge(db: AsyncSession, user_a_id: str, user_b_id: str) -> Optional[Friendship]:
        """Look up the single edge for an unordered pair."""
        pair = FriendPair.of(user_a_id, user_b_id)
        result = await db.execute(
            select(Friendship).where(
                Friendship.user_low_id == pair.low,
                Friendship.user_high_id == pair.high,
            ).execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_id(db: AsyncSession, request_id: str) -> Optional[Friendship]:
        result = await db.execute(
            select(Friendship)
            .where(Friendship.id == request_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @staticmethod
    def _raise_for_existing(edge: Optional[Friendship]) -> None:
        if edge is None:
            raise ConflictError("Relationship changed, please retry")
        if edge.status == FriendshipStatus.ACCEPTED:
            raise AlreadyFriendsError()
        if edge.status == FriendshipStatus.PENDING:
            raise RequestAlreadyPendingError()

    async def send_request(
        self,
        db: AsyncSession,
        requester_id: str,
        target_id: str
    ) -> Tuple[Friendship, bool]:
        """
        Send (or re-send) a friend request.

        Returns:
            (edge, created) where created is False when a rejected edge
            was revived back to pending

        Raises:
            InvalidTargetError, UnknownTargetError, AlreadyFriendsError,
            RequestAlreadyPendingError
        """
        try:
            edge, created = await self._send_request(db, requester_id, target_id)
        except WishNestError as e:
            friendship_transitions.labels(action='request', outcome=_outcome(e)).inc()
            raise

        action = 'request' if created else 'rerequest'
        friendship_transitions.labels(action=action, outcome='ok').inc()
        logger.info(f"Friend request {'sent' if created else 're-sent'}: {requester_id} -> {target_id}")
        return edge, created

    async def _send_request(self, db: AsyncSession, requester_id: str, target_id: str) -> Tuple[Friendship, bool]:
        if str(requester_id) == str(target_id):
            raise InvalidTargetError()
        if not await user_service.exists(db, target_id):
            raise UnknownTargetError()

        pair = FriendPair.of(requester_id, target_id)
        existing = await self.get_edge(db, requester_id, target_id)

        if existing is None:
            edge = Friendship.for_pair(pair, requester_id)
            db.add(edge)
            try:
                await db.commit()
            except IntegrityError:
                # Concurrent request for the same pair won the insert
                await db.rollback()
                logger.warning(f"Lost friend request insert race for pair {pair}")
                self._raise_for_existing(await self.get_edge(db, requester_id, target_id))
                raise ConflictError("Relationship changed, please retry")
            await db.refresh(edge)
            return edge, True

        self._raise_for_existing(existing)
        existing_id = existing.id

        # Rejected: flip back to pending with the new requester
        result = await db.execute(
            update(Friendship)
            .where(
                Friendship.id == existing_id,
                Friendship.status == FriendshipStatus.REJECTED,
            )
            .values(status=FriendshipStatus.PENDING, requester_id=requester_id)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            await db.rollback()
            logger.warning(f"Lost re-request race on friendship {existing_id}")
            self._raise_for_existing(await self.get_edge(db, requester_id, target_id))
            raise ConflictError("Relationship changed, please retry")

        await db.commit()
        await db.refresh(existing)
        return existing, False

    async def accept_request(self, db: AsyncSession, actor_id: str, request_id: str) -> Friendship:
        """Accept a pending request. Only the recipient may accept."""
        return await self._answer(db, actor_id, request_id, FriendshipStatus.ACCEPTED, 'accept')

    async def reject_request(self, db: AsyncSession, actor_id: str, request_id: str) -> Friendship:
        """Reject a pending request. Only the recipient may reject."""
        return await self._answer(db, actor_id, request_id, FriendshipStatus.REJECTED, 'reject')

    async def _answer(
        self,
        db: AsyncSession,
        actor_id: str,
        request_id: str,
        new_status: str,
        action: str
    ) -> Friendship:
        try:
            edge = await self.get_by_id(db, request_id)
            if edge is None:
                raise RequestNotFoundError()
            if edge.status != FriendshipStatus.PENDING:
                raise NotPendingError()
            if actor_id != edge.recipient_id:
                raise NotRecipientError()

            result = await db.execute(
                update(Friendship)
                .where(
                    Friendship.id == edge.id,
                    Friendship.status == FriendshipStatus.PENDING,
                    Friendship.requester_id == edge.requester_id,
                )
                .values(status=new_status)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                await db.rollback()
                logger.warning(f"Lost {action} race on friendship {request_id}")
                raise NotPendingError()
        except WishNestError as e:
            friendship_transitions.labels(action=action, outcome=_outcome(e)).inc()
            raise

        await db.commit()
        await db.refresh(edge)
        friendship_transitions.labels(action=action, outcome='ok').inc()
        logger.info(f"Friend request {edge.id} {new_status} by {actor_id}")
        return edge

    async def remove(self, db: AsyncSession, actor_id: str, other_id: str) -> None:
        """
        Remove the relationship with another user, whatever its status.
        Either participant may remove.
        """
        if str(actor_id) == str(other_id):
            friendship_transitions.labels(action='remove', outcome='not_found').inc()
            raise RelationshipNotFoundError()

        pair = FriendPair.of(actor_id, other_id)
        result = await db.execute(
            delete(Friendship)
            .where(
                Friendship.user_low_id == pair.low,
                Friendship.user_high_id == pair.high,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            await db.rollback()
            friendship_transitions.labels(action='remove', outcome='not_found').inc()
            raise RelationshipNotFoundError()

        await db.commit()
        friendship_transitions.labels(action='remove', outcome='ok').inc()
        logger.info(f"Relationship removed: {actor_id} <-> {other_id}")

    async def list_friends(self, db: AsyncSession, user_id: str) -> List[User]:
        """All users on the other end of an accepted edge."""
        result = await db.execute(
            select(Friendship).where(
                or_(Friendship.user_low_id == user_id, Friendship.user_high_id == user_id),
                Friendship.status == FriendshipStatus.ACCEPTED,
            )
        )
        edges = result.scalars().all()
        friend_ids = [edge.other_user_id(user_id) for edge in edges]

        friends = await user_service.get_many(db, friend_ids)
        return sorted(friends, key=lambda u: u.username)

    async def list_requests(self, db: AsyncSession, user_id: str) -> Dict[str, List[Tuple[Friendship, User]]]:
        """
        Pending edges touching the user, split by direction.
        Returns: {
            "incoming": [(Friendship, requester User)...],
            "outgoing": [(Friendship, recipient User)...]
        }
        """
        result = await db.execute(
            select(Friendship)
            .where(
                or_(Friendship.user_low_id == user_id, Friendship.user_high_id == user_id),
                Friendship.status == FriendshipStatus.PENDING,
            )
            .order_by(Friendship.updated_at.desc())
        )
        edges = result.scalars().all()

        others = await user_service.get_many(db, [e.other_user_id(user_id) for e in edges])
        users_by_id = {u.id: u for u in others}

        incoming = []
        outgoing = []
        for edge in edges:
            other = users_by_id.get(edge.other_user_id(user_id))
            if other is None:
                continue
            if edge.requester_id == user_id:
                outgoing.append((edge, other))
            else:
                incoming.append((edge, other))

        return {"incoming": incoming, "outgoing": outgoing}


# Singleton
friendship_service = FriendshipService()

"""
Friendship Model - Undirected friendship edges

One row per unordered pair of users. The pair is always stored in
canonical (ascending id) order, so {A, B} and {B, A} address the same row
and the unique constraint on the pair guarantees at most one edge.

Lifecycle:
- pending  -> accepted (recipient only)
- pending  -> rejected (recipient only)
- rejected -> pending  (new request from either side, requester updated)
- any      -> deleted  (either participant)
"""
from dataclasses import dataclass
from datetime import datetime, UTC
import uuid

from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint, CheckConstraint

from .database import Base
from wishnest.config.constants import FRIENDSHIP_PENDING, FRIENDSHIP_ACCEPTED, FRIENDSHIP_REJECTED


class FriendshipStatus:
    PENDING = FRIENDSHIP_PENDING
    ACCEPTED = FRIENDSHIP_ACCEPTED
    REJECTED = FRIENDSHIP_REJECTED

    ALL = (PENDING, ACCEPTED, REJECTED)


@dataclass(frozen=True)
class FriendPair:
    """Canonical unordered pair of two distinct user ids."""
    low: str
    high: str

    @classmethod
    def of(cls, a: str, b: str) -> "FriendPair":
        a, b = str(a), str(b)
        if a == b:
            raise ValueError("a friendship needs two distinct users")
        low, high = sorted((a, b))
        return cls(low=low, high=high)

    def other(self, user_id: str) -> str:
        if user_id == self.low:
            return self.high
        if user_id == self.high:
            return self.low
        raise ValueError(f"user {user_id} is not part of this pair")

    def __contains__(self, user_id: str) -> bool:
        return user_id in (self.low, self.high)


class Friendship(Base):
    """Friendship edge between two users"""
    __tablename__ = "friendships"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Participants, canonical order (user_low_id < user_high_id)
    user_low_id = Column(String(36), ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    user_high_id = Column(String(36), ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)

    # Participant who initiated the most recent request
    requester_id = Column(String(36), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)

    status = Column(String(20), default=FRIENDSHIP_PENDING, nullable=False)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), onupdate=lambda: datetime.now(UTC))

    __table_args__ = (
        UniqueConstraint('user_low_id', 'user_high_id', name='uq_friendship_pair'),
        CheckConstraint('user_low_id < user_high_id', name='ck_friendship_canonical_pair'),
        CheckConstraint(
            "status IN ('pending', 'accepted', 'rejected')",
            name='ck_friendship_status'
        ),
    )

    @classmethod
    def for_pair(cls, pair: FriendPair, requester_id: str) -> "Friendship":
        return cls(
            user_low_id=pair.low,
            user_high_id=pair.high,
            requester_id=requester_id,
            status=FRIENDSHIP_PENDING,
        )

    @property
    def pair(self) -> FriendPair:
        return FriendPair(low=self.user_low_id, high=self.user_high_id)

    @property
    def recipient_id(self) -> str:
        """The participant who did not send the request."""
        return self.pair.other(self.requester_id)

    def other_user_id(self, user_id: str) -> str:
        return self.pair.other(user_id)

    def to_dict(self):
        return {
            "id": self.id,
            "participants": [self.user_low_id, self.user_high_id],
            "requester_id": self.requester_id,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<Friendship {self.user_low_id[:8]}<->{self.user_high_id[:8]} {self.status}>"

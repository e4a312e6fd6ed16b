"""
Item Model - Wishlist items with one optional alternate and a reservation slot

Key Fields:
- `alternate_*`: a single embedded alternate suggestion; present iff
  `alternate_title` is set
- `reserved_by_user_id` / `reserved_at`: the reservation slot. Both set or
  both null (enforced by a check constraint); presence of the reserver is
  the only source of truth for "is reserved"
"""
from dataclasses import dataclass
from datetime import datetime, UTC
from typing import Optional, Union
import uuid

from sqlalchemy import Column, String, DateTime, Float, ForeignKey, CheckConstraint

from .database import Base


@dataclass(frozen=True)
class Alternate:
    """Single alternate suggestion embedded in an item."""
    title: str
    url: Optional[str] = None
    note: Optional[str] = None
    price: Optional[float] = None

    def to_dict(self):
        return {
            "title": self.title,
            "url": self.url,
            "note": self.note,
            "price": self.price,
        }


@dataclass(frozen=True)
class Free:
    """Reservation slot is empty."""


@dataclass(frozen=True)
class Reserved:
    """Reservation slot is claimed by `user_id` since `at`."""
    user_id: str
    at: datetime


ReservationState = Union[Free, Reserved]

FREE = Free()


class Item(Base):
    """An item on a wishlist"""
    __tablename__ = "items"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    wishlist_id = Column(String(36), ForeignKey('wishlists.id', ondelete='CASCADE'), nullable=False, index=True)

    # Core fields
    title = Column(String(140), nullable=False)
    description = Column(String(600), nullable=False)
    category = Column(String(20), nullable=False, index=True)

    # Optional presentation fields
    icon_key = Column(String(30), nullable=True)
    url = Column(String(1000), nullable=True)
    price = Column(Float, nullable=True)

    # Embedded alternate suggestion
    alternate_title = Column(String(140), nullable=True)
    alternate_url = Column(String(1000), nullable=True)
    alternate_note = Column(String(300), nullable=True)
    alternate_price = Column(Float, nullable=True)

    # Reservation slot (a back-reference to the reserver, no ownership implied)
    reserved_by_user_id = Column(String(36), ForeignKey('users.id'), nullable=True, index=True)
    reserved_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), onupdate=lambda: datetime.now(UTC))

    __table_args__ = (
        CheckConstraint("category IN ('everyday', 'dream')", name='ck_item_category'),
        CheckConstraint(
            "(reserved_by_user_id IS NULL AND reserved_at IS NULL) OR "
            "(reserved_by_user_id IS NOT NULL AND reserved_at IS NOT NULL)",
            name='ck_item_reservation_slot'
        ),
        CheckConstraint("price IS NULL OR price >= 0", name='ck_item_price'),
        CheckConstraint("alternate_price IS NULL OR alternate_price >= 0", name='ck_item_alternate_price'),
    )

    @property
    def alternate(self) -> Optional[Alternate]:
        if self.alternate_title is None:
            return None
        return Alternate(
            title=self.alternate_title,
            url=self.alternate_url,
            note=self.alternate_note,
            price=self.alternate_price,
        )

    @alternate.setter
    def alternate(self, value: Optional[Alternate]):
        self.alternate_title = value.title if value else None
        self.alternate_url = value.url if value else None
        self.alternate_note = value.note if value else None
        self.alternate_price = value.price if value else None

    @property
    def reservation(self) -> ReservationState:
        if self.reserved_by_user_id is None:
            return FREE
        return Reserved(user_id=self.reserved_by_user_id, at=self.reserved_at)

    @property
    def is_reserved(self) -> bool:
        return isinstance(self.reservation, Reserved)

    def to_dict(self, include_reservation: bool = True):
        """
        Convert to dictionary for JSON response.

        The owner's view must pass include_reservation=False: the reservation
        slot is then left out entirely so the owner cannot tell whether the
        item is reserved.
        """
        alternate = self.alternate
        data = {
            "id": self.id,
            "wishlist_id": self.wishlist_id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "icon_key": self.icon_key,
            "url": self.url,
            "price": self.price,
            "alternate": alternate.to_dict() if alternate else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
        if include_reservation:
            state = self.reservation
            reserved = isinstance(state, Reserved)
            data["is_reserved"] = reserved
            data["reserved_by_user_id"] = state.user_id if reserved else None
            data["reserved_at"] = state.at.isoformat() if reserved and state.at else None
        return data

    def __repr__(self):
        return f"<Item {self.title!r}>"

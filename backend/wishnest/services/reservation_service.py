"""
Reservation Service - Claim and release an item's single reservation slot

Per item the slot is either Free or Reserved(user, at). Both transitions
are a single conditional UPDATE:

- reserve:   Free -> Reserved, only where no reserver is set
- unreserve: Reserved -> Free, only where the reserver is still the one
             that was read

A zero row count means a concurrent request changed the slot first; the
caller gets a conflict and the winner's reservation is never overwritten.
"""
from datetime import datetime, UTC
from typing import Tuple
import logging

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from wishnest.models.item import Item, Free, Reserved
from wishnest.models.wishlist import Wishlist
from wishnest.services.visibility import can_view
from wishnest.services.metrics import reservation_attempts
from wishnest.services.exceptions import (
    WishNestError,
    ForbiddenError,
    ItemNotFoundError,
    AlreadyReservedError,
    NotReservedError,
)

logger = logging.getLogger(__name__)


class ReservationService:
    """Service for the per-item reservation state machine."""

    @staticmethod
    async def load_visible_item(db: AsyncSession, actor_id: str, item_id: str) -> Tuple[Item, str]:
        """
        Load an item together with its wishlist owner's id.

        Raises:
            ItemNotFoundError if the item is missing or the actor may not
            see the owner's wishlist
        """
        result = await db.execute(
            select(Item, Wishlist.user_id)
            .join(Wishlist, Item.wishlist_id == Wishlist.id)
            .where(Item.id == item_id)
            .execution_options(populate_existing=True)
        )
        row = result.first()
        if row is None:
            raise ItemNotFoundError()

        item, owner_id = row
        if not await can_view(db, actor_id, owner_id):
            raise ItemNotFoundError()
        return item, owner_id

    @staticmethod
    async def claim(db: AsyncSession, item_id: str, user_id: str) -> bool:
        """Conditionally set the slot. Returns False if it was not Free."""
        result = await db.execute(
            update(Item)
            .where(Item.id == item_id, Item.reserved_by_user_id.is_(None))
            .values(reserved_by_user_id=user_id, reserved_at=datetime.now(UTC))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @staticmethod
    async def release(db: AsyncSession, item_id: str, reserver_id: str) -> bool:
        """Conditionally clear the slot. Returns False if it was not held by reserver_id."""
        result = await db.execute(
            update(Item)
            .where(Item.id == item_id, Item.reserved_by_user_id == reserver_id)
            .values(reserved_by_user_id=None, reserved_at=None)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def reserve(self, db: AsyncSession, actor_id: str, item_id: str) -> Tuple[Item, str]:
        """
        Reserve an item for the actor (owner or accepted friend of the owner).

        Returns:
            (item, owner_id)

        Raises:
            ItemNotFoundError, AlreadyReservedError
        """
        try:
            item, owner_id = await self.load_visible_item(db, actor_id, item_id)

            if isinstance(item.reservation, Reserved):
                raise AlreadyReservedError()

            if not await self.claim(db, item.id, actor_id):
                await db.rollback()
                logger.warning(f"Lost reservation race on item {item_id} (actor {actor_id})")
                raise AlreadyReservedError()
        except WishNestError as e:
            reservation_attempts.labels(action='reserve', outcome=e.kind.value).inc()
            raise

        await db.commit()
        await db.refresh(item)
        reservation_attempts.labels(action='reserve', outcome='ok').inc()
        logger.info(f"Item {item.id} reserved by {actor_id}")
        return item, owner_id

    async def unreserve(self, db: AsyncSession, actor_id: str, item_id: str) -> Tuple[Item, str]:
        """
        Release an item's reservation. Only the reserver or the wishlist
        owner may release it.

        Returns:
            (item, owner_id)

        Raises:
            ItemNotFoundError, NotReservedError, ForbiddenError
        """
        try:
            item, owner_id = await self.load_visible_item(db, actor_id, item_id)

            state = item.reservation
            if isinstance(state, Free):
                raise NotReservedError()
            if actor_id not in (state.user_id, owner_id):
                raise ForbiddenError("Only the reserver or the owner can release this reservation")

            if not await self.release(db, item.id, state.user_id):
                await db.rollback()
                logger.warning(f"Lost unreserve race on item {item_id} (actor {actor_id})")
                raise NotReservedError()
        except WishNestError as e:
            reservation_attempts.labels(action='unreserve', outcome=e.kind.value).inc()
            raise

        await db.commit()
        await db.refresh(item)
        reservation_attempts.labels(action='unreserve', outcome='ok').inc()
        logger.info(f"Item {item.id} unreserved by {actor_id}")
        return item, owner_id


# Singleton
reservation_service = ReservationService()

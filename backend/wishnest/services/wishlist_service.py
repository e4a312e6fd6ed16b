"""
Wishlist Service - One wishlist per user

Encapsulates logic for:
- Lazy get-or-create of the owner's wishlist
- Updating title / description (upserts when absent)
- Deleting the wishlist together with its items
- Friend-facing metadata reads, gated by the visibility policy
"""
from typing import Any, Dict, Optional
import logging

from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from wishnest.models.wishlist import Wishlist
from wishnest.models.item import Item
from wishnest.services.visibility import ensure_can_view
from wishnest.services.exceptions import InvalidInputError, WishlistNotFoundError
from wishnest.config.constants import (
    DEFAULT_WISHLIST_TITLE,
    DEFAULT_WISHLIST_DESCRIPTION,
    WISHLIST_TITLE_MAX_LENGTH,
    WISHLIST_DESCRIPTION_MAX_LENGTH,
)

logger = logging.getLogger(__name__)


def _validate_wishlist_fields(fields: Dict[str, Any]) -> Dict[str, str]:
    """Check each provided field on its own; absent or null fields are skipped."""
    changes = {}

    title = fields.get("title")
    if title is not None:
        if not isinstance(title, str):
            raise InvalidInputError("Title must be a string")
        title = title.strip()
        if not title:
            raise InvalidInputError("Title cannot be empty")
        if len(title) > WISHLIST_TITLE_MAX_LENGTH:
            raise InvalidInputError(f"Title too long (max {WISHLIST_TITLE_MAX_LENGTH})")
        changes["title"] = title

    description = fields.get("description")
    if description is not None:
        if not isinstance(description, str):
            raise InvalidInputError("Description must be a string")
        description = description.strip()
        if len(description) > WISHLIST_DESCRIPTION_MAX_LENGTH:
            raise InvalidInputError(f"Description too long (max {WISHLIST_DESCRIPTION_MAX_LENGTH})")
        changes["description"] = description

    return changes


class WishlistService:
    """Service for the single per-user wishlist."""

    @staticmethod
    async def get(db: AsyncSession, owner_id: str) -> Optional[Wishlist]:
        result = await db.execute(
            select(Wishlist)
            .where(Wishlist.user_id == owner_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_or_create(self, db: AsyncSession, owner_id: str) -> Wishlist:
        """
        Return the owner's wishlist, creating the default one if needed.

        Concurrent first accesses race on the unique owner column; the
        loser rolls back and reads the winner's row.
        """
        wishlist = await self.get(db, owner_id)
        if wishlist:
            return wishlist

        wishlist = Wishlist(
            user_id=owner_id,
            title=DEFAULT_WISHLIST_TITLE,
            description=DEFAULT_WISHLIST_DESCRIPTION,
        )
        db.add(wishlist)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            logger.warning(f"Concurrent wishlist creation for user {owner_id}, using existing row")
            existing = await self.get(db, owner_id)
            if existing is None:
                raise
            return existing

        await db.refresh(wishlist)
        logger.info(f"Wishlist created for user {owner_id}")
        return wishlist

    async def update(self, db: AsyncSession, owner_id: str, fields: Dict[str, Any]) -> Wishlist:
        """Update title/description. Creates the wishlist first if absent."""
        changes = _validate_wishlist_fields(fields)

        wishlist = await self.get_or_create(db, owner_id)
        if not changes:
            return wishlist

        for key, value in changes.items():
            setattr(wishlist, key, value)
        await db.commit()
        await db.refresh(wishlist)

        logger.info(f"Wishlist {wishlist.id} updated: {sorted(changes)}")
        return wishlist

    async def delete(self, db: AsyncSession, owner_id: str) -> None:
        """
        Delete the owner's wishlist and all of its items in one transaction.

        Raises:
            WishlistNotFoundError if the owner has no wishlist
        """
        wishlist = await self.get(db, owner_id)
        if not wishlist:
            raise WishlistNotFoundError()

        items_result = await db.execute(
            delete(Item)
            .where(Item.wishlist_id == wishlist.id)
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(
            delete(Wishlist)
            .where(Wishlist.id == wishlist.id)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            await db.rollback()
            raise WishlistNotFoundError()

        await db.commit()
        db.expunge(wishlist)
        logger.info(f"Wishlist {wishlist.id} deleted with {items_result.rowcount} items")

    async def get_meta_for_viewer(self, db: AsyncSession, viewer_id: str, owner_id: str) -> Wishlist:
        """
        Friend-facing read of another user's wishlist.

        Raises:
            NotFriendsError if the viewer is neither owner nor accepted friend
            WishlistNotFoundError if the owner has no wishlist yet
        """
        await ensure_can_view(db, viewer_id, owner_id)

        wishlist = await self.get(db, owner_id)
        if not wishlist:
            raise WishlistNotFoundError()
        return wishlist


# Singleton
wishlist_service = WishlistService()

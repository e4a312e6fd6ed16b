"""
Item Service - CRUD for the owner's wishlist items

Only the owner creates, edits and deletes items. Item ids from another
user's wishlist are reported as not found so their existence never leaks.
Reservation state is handled separately by the reservation service.
"""
from numbers import Real
import math
from typing import Any, Dict, List, Optional
import logging

from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession

from wishnest.models.item import Item, Alternate
from wishnest.services.wishlist_service import wishlist_service
from wishnest.services.visibility import ensure_can_view
from wishnest.services.exceptions import InvalidInputError, InvalidPayloadError, ItemNotFoundError
from wishnest.config.constants import (
    ITEM_TITLE_MAX_LENGTH,
    ITEM_DESCRIPTION_MAX_LENGTH,
    ITEM_ICON_KEY_MAX_LENGTH,
    ITEM_URL_MAX_LENGTH,
    ITEM_CATEGORIES,
    ALTERNATE_TITLE_MAX_LENGTH,
    ALTERNATE_URL_MAX_LENGTH,
    ALTERNATE_NOTE_MAX_LENGTH,
)

logger = logging.getLogger(__name__)


# === Field validation ===

def _required_text(value: Any, label: str, max_length: int) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"{label} is required")
    value = value.strip()
    if len(value) > max_length:
        raise InvalidInputError(f"{label} too long (max {max_length})")
    return value


def _optional_text(value: Any, label: str, max_length: int) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidInputError(f"{label} must be a string")
    value = value.strip()
    if len(value) > max_length:
        raise InvalidInputError(f"{label} too long (max {max_length})")
    return value or None


def _optional_price(value: Any, label: str = "price") -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidInputError(f"Invalid {label}")
    if not math.isfinite(value) or value < 0:
        raise InvalidInputError(f"Invalid {label}")
    return float(value)


def _category(value: Any) -> str:
    if not isinstance(value, str) or value.strip() not in ITEM_CATEGORIES:
        raise InvalidInputError('Category must be "everyday" or "dream"')
    return value.strip()


def _alternate(value: Dict[str, Any]) -> Alternate:
    """Build an alternate from a dict that carries a string title."""
    title = value.get("title")
    if not isinstance(title, str) or not title.strip():
        raise InvalidPayloadError("Alternate title is required when setting alternate")
    title = title.strip()
    if len(title) > ALTERNATE_TITLE_MAX_LENGTH:
        raise InvalidInputError(f"Alternate title too long (max {ALTERNATE_TITLE_MAX_LENGTH})")

    return Alternate(
        title=title,
        url=_optional_text(value.get("url"), "Alternate url", ALTERNATE_URL_MAX_LENGTH),
        note=_optional_text(value.get("note"), "Alternate note", ALTERNATE_NOTE_MAX_LENGTH),
        price=_optional_price(value.get("price"), "alternate price"),
    )


def validate_new_item(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Validate a create payload into column values."""
    values = {
        "title": _required_text(fields.get("title"), "Title", ITEM_TITLE_MAX_LENGTH),
        "description": _required_text(fields.get("description"), "Description", ITEM_DESCRIPTION_MAX_LENGTH),
        "category": _category(fields.get("category")),
        "icon_key": _optional_text(fields.get("icon_key"), "Icon key", ITEM_ICON_KEY_MAX_LENGTH),
        "url": _optional_text(fields.get("url"), "URL", ITEM_URL_MAX_LENGTH),
        "price": _optional_price(fields.get("price")),
    }

    # Embedded only when a well-formed object with a title is supplied
    alternate = fields.get("alternate")
    if isinstance(alternate, dict) and isinstance(alternate.get("title"), str):
        values["alternate"] = _alternate(alternate)

    return values


def validate_item_changes(fields: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate a partial update into column values.

    Only keys present in `fields` are touched. An explicit None clears an
    optional field and removes the alternate; required fields cannot be
    cleared.
    """
    changes = {}

    if "title" in fields:
        changes["title"] = _required_text(fields["title"], "Title", ITEM_TITLE_MAX_LENGTH)
    if "description" in fields:
        changes["description"] = _required_text(fields["description"], "Description", ITEM_DESCRIPTION_MAX_LENGTH)
    if "category" in fields:
        changes["category"] = _category(fields["category"])
    if "icon_key" in fields:
        changes["icon_key"] = _optional_text(fields["icon_key"], "Icon key", ITEM_ICON_KEY_MAX_LENGTH)
    if "url" in fields:
        changes["url"] = _optional_text(fields["url"], "URL", ITEM_URL_MAX_LENGTH)
    if "price" in fields:
        changes["price"] = _optional_price(fields["price"])

    if "alternate" in fields:
        alternate = fields["alternate"]
        if alternate is None:
            alt = None
        elif isinstance(alternate, dict):
            alt = _alternate(alternate)
        else:
            raise InvalidPayloadError("Invalid alternate payload")
        changes["alternate_title"] = alt.title if alt else None
        changes["alternate_url"] = alt.url if alt else None
        changes["alternate_note"] = alt.note if alt else None
        changes["alternate_price"] = alt.price if alt else None

    return changes


class ItemService:
    """Service for wishlist items."""

    @staticmethod
    async def get_owned(db: AsyncSession, owner_id: str, item_id: str) -> Item:
        """
        Get an item from the owner's own wishlist.

        Raises:
            ItemNotFoundError if the item is missing or belongs to someone else
        """
        wishlist = await wishlist_service.get(db, owner_id)
        if not wishlist:
            raise ItemNotFoundError()

        result = await db.execute(
            select(Item)
            .where(Item.id == item_id, Item.wishlist_id == wishlist.id)
            .execution_options(populate_existing=True)
        )
        item = result.scalar_one_or_none()
        if not item:
            raise ItemNotFoundError()
        return item

    async def create_item(self, db: AsyncSession, owner_id: str, fields: Dict[str, Any]) -> Item:
        """Create an item, creating the owner's wishlist first if needed."""
        values = validate_new_item(fields)

        wishlist = await wishlist_service.get_or_create(db, owner_id)

        item = Item(wishlist_id=wishlist.id, **values)
        db.add(item)
        await db.commit()
        await db.refresh(item)

        logger.info(f"Item {item.id} created on wishlist {wishlist.id}")
        return item

    async def update_item(self, db: AsyncSession, owner_id: str, item_id: str, fields: Dict[str, Any]) -> Item:
        changes = validate_item_changes(fields)

        wishlist = await wishlist_service.get(db, owner_id)
        if not wishlist:
            raise ItemNotFoundError()

        if changes:
            result = await db.execute(
                update(Item)
                .where(Item.id == item_id, Item.wishlist_id == wishlist.id)
                .values(**changes)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                await db.rollback()
                raise ItemNotFoundError()
            await db.commit()
            logger.info(f"Item {item_id} updated: {sorted(changes)}")

        return await self.get_owned(db, owner_id, item_id)

    async def delete_item(self, db: AsyncSession, owner_id: str, item_id: str) -> None:
        wishlist = await wishlist_service.get(db, owner_id)
        if not wishlist:
            raise ItemNotFoundError()

        result = await db.execute(
            delete(Item)
            .where(Item.id == item_id, Item.wishlist_id == wishlist.id)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            await db.rollback()
            raise ItemNotFoundError()

        await db.commit()
        logger.info(f"Item {item_id} deleted from wishlist {wishlist.id}")

    async def list_items(self, db: AsyncSession, owner_id: str) -> List[Item]:
        """All items on the owner's wishlist, newest first."""
        wishlist = await wishlist_service.get(db, owner_id)
        if not wishlist:
            return []

        result = await db.execute(
            select(Item)
            .where(Item.wishlist_id == wishlist.id)
            .order_by(Item.created_at.desc())
            .execution_options(populate_existing=True)
        )
        return result.scalars().all()

    async def list_items_for_viewer(self, db: AsyncSession, viewer_id: str, owner_id: str) -> List[Item]:
        """
        Same listing as list_items, for the owner or an accepted friend.

        Raises:
            NotFriendsError otherwise
        """
        await ensure_can_view(db, viewer_id, owner_id)
        return await self.list_items(db, owner_id)


# Singleton
item_service = ItemService()

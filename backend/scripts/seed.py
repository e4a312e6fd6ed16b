"""
Populate the database with sample WishNest data.

Safe to run repeatedly: existing users, wishlists and items are reused.
Usage (from backend/): python -m scripts.seed
"""
import asyncio
from datetime import datetime, UTC

from sqlalchemy import select, or_

from wishnest.models.database import AsyncSessionLocal, init_db
from wishnest.models import User, Friendship, FriendPair, FriendshipStatus, Wishlist, Item
from wishnest.services.auth_service import hash_password

DEFAULT_PASSWORD = "Passw0rd!"


async def ensure_user(db, name: str, username: str, email: str) -> User:
    result = await db.execute(select(User).where(or_(User.email == email, User.username == username)))
    user = result.scalar_one_or_none()
    if user:
        print(f"User exists: {email}")
        return user

    user = User(name=name, username=username, email=email, password_hash=hash_password(DEFAULT_PASSWORD))
    db.add(user)
    await db.flush()
    print(f"Created user: {email}")
    return user


async def ensure_wishlist(db, user: User, title: str, description: str) -> Wishlist:
    result = await db.execute(select(Wishlist).where(Wishlist.user_id == user.id))
    wishlist = result.scalar_one_or_none()
    if wishlist:
        print(f"Wishlist exists for: {user.username}")
        return wishlist

    wishlist = Wishlist(user_id=user.id, title=title, description=description)
    db.add(wishlist)
    await db.flush()
    print(f"Created wishlist for: {user.username}")
    return wishlist


async def ensure_item(db, wishlist: Wishlist, **fields) -> Item:
    result = await db.execute(
        select(Item).where(Item.wishlist_id == wishlist.id, Item.title == fields["title"])
    )
    item = result.scalar_one_or_none()
    if item:
        return item

    item = Item(wishlist_id=wishlist.id, **fields)
    db.add(item)
    await db.flush()
    print(f" + Item: {item.title}")
    return item


async def ensure_friends(db, a: User, b: User) -> None:
    pair = FriendPair.of(a.id, b.id)
    result = await db.execute(
        select(Friendship).where(Friendship.user_low_id == pair.low, Friendship.user_high_id == pair.high)
    )
    edge = result.scalar_one_or_none()
    if edge is None:
        edge = Friendship.for_pair(pair, requester_id=b.id)
        db.add(edge)
    edge.status = FriendshipStatus.ACCEPTED
    await db.flush()


async def seed():
    await init_db()

    async with AsyncSessionLocal() as db:
        tejas = await ensure_user(db, "Tejas Ganesh", "tejas", "tejas@example.com")
        friend = await ensure_user(db, "Friend Contributor", "friend1", "friend@example.com")
        await ensure_friends(db, tejas, friend)

        wishlist = await ensure_wishlist(db, tejas, "Tejas' Wishlist", "Things I want or need this year")

        await ensure_item(
            db, wishlist,
            title="Kindle Paperwhite",
            description="Prefer 16GB version",
            category="everyday",
            url="https://example.com/kindle",
            price=13999,
        )
        # Reserved by the friend to demo the flow
        await ensure_item(
            db, wishlist,
            title="Noise-Cancelling Headphones",
            description="Prefer black color",
            category="dream",
            url="https://example.com/headphones",
            price=12999,
            reserved_by_user_id=friend.id,
            reserved_at=datetime.now(UTC),
        )
        await ensure_item(
            db, wishlist,
            title="Running Shoes",
            description="EU size 43",
            category="everyday",
            url="https://example.com/shoes",
            price=5999,
        )

        await db.commit()

    print("\nSeed complete. Credentials:")
    print(f" - tejas@example.com / {DEFAULT_PASSWORD}")
    print(f" - friend@example.com / {DEFAULT_PASSWORD}")


if __name__ == "__main__":
    asyncio.run(seed())

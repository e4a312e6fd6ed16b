import asyncio
from wishnest.models.database import init_db


async def create_tables():
    """Create all database tables"""
    print("Creating database tables...")
    print("Tables to create:")
    print("  - users")
    print("  - friendships")
    print("  - wishlists")
    print("  - items")

    await init_db()

    print("✅ All tables created successfully!")
    print("\nDatabase schema ready for WishNest")


if __name__ == "__main__":
    asyncio.run(create_tables())

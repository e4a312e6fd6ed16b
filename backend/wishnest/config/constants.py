"""
Application-wide constants for validation limits and tuning.

Note: Environment-dependent settings (DB, JWT, metrics port) belong in settings.py.
This file is for values that never change between environments.
"""

# ==============================================================================
# DATABASE POOL
# ==============================================================================

DB_POOL_SIZE: int = 10
DB_POOL_MAX_OVERFLOW: int = 20

# ==============================================================================
# WISHLIST
# ==============================================================================

DEFAULT_WISHLIST_TITLE: str = "My Wishlist"
DEFAULT_WISHLIST_DESCRIPTION: str = ""

WISHLIST_TITLE_MAX_LENGTH: int = 100
WISHLIST_DESCRIPTION_MAX_LENGTH: int = 500

# ==============================================================================
# ITEMS
# ==============================================================================

ITEM_TITLE_MAX_LENGTH: int = 140
ITEM_DESCRIPTION_MAX_LENGTH: int = 600
ITEM_ICON_KEY_MAX_LENGTH: int = 30
ITEM_URL_MAX_LENGTH: int = 1000

# Mood bucket drives default icon/styling on the client
ITEM_CATEGORIES: tuple[str, ...] = ("everyday", "dream")

# Single embedded alternate suggestion
ALTERNATE_TITLE_MAX_LENGTH: int = 140
ALTERNATE_URL_MAX_LENGTH: int = 1000
ALTERNATE_NOTE_MAX_LENGTH: int = 300

# ==============================================================================
# USERS
# ==============================================================================

USER_NAME_MAX_LENGTH: int = 255
USERNAME_MAX_LENGTH: int = 50
EMAIL_MAX_LENGTH: int = 255

# ==============================================================================
# FRIENDSHIPS
# ==============================================================================

FRIENDSHIP_PENDING: str = "pending"
FRIENDSHIP_ACCEPTED: str = "accepted"
FRIENDSHIP_REJECTED: str = "rejected"

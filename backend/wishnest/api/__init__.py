from fastapi import APIRouter

from wishnest.api import auth
from wishnest.api import friends
from wishnest.api import wishlist
from wishnest.api import items

router = APIRouter()


@router.get("/health")
async def health():
    return {"status": "ok"}


# Include auth, friends, wishlist, items routers
router.include_router(auth.router)
router.include_router(friends.router)
router.include_router(wishlist.router)
router.include_router(items.router)

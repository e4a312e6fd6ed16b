from typing import Optional
import logging

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from wishnest.models.database import get_db
from wishnest.models.user import User
from wishnest.services.auth_service import decode_token
from wishnest.services.user_service import user_service
from wishnest.services.exceptions import InvalidCredentialsError

logger = logging.getLogger(__name__)


async def get_current_user(
    authorization: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db)
) -> User:
    """
    Resolve the caller from a `Authorization: Bearer <jwt>` header.
    Every failure is answered with 401.
    """
    if not authorization:
        raise InvalidCredentialsError("Missing Authorization header")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise InvalidCredentialsError("Invalid Authorization header")

    payload = decode_token(token)
    if not payload:
        raise InvalidCredentialsError("Invalid token")
    user_id = payload.get("sub")
    if not user_id:
        raise InvalidCredentialsError("Invalid token payload")

    user = await user_service.get_by_id(db, user_id)
    if not user:
        logger.warning(f"Token for unknown user {user_id}")
        raise InvalidCredentialsError("User not found")
    return user

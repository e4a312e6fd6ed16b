from typing import Optional
import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, or_

from wishnest.models.user import User
from wishnest.services.auth_service import hash_password, verify_password
from wishnest.services.exceptions import (
    InvalidInputError,
    InvalidCredentialsError,
    DuplicateUserError,
    UserNotFoundError,
)
from wishnest.config.constants import USERNAME_MAX_LENGTH, EMAIL_MAX_LENGTH, USER_NAME_MAX_LENGTH

logger = logging.getLogger(__name__)


class UserService:
    """
    Service for centralized User retrieval and management.
    Eliminates duplicated select(User) queries across the app.
    """

    @staticmethod
    async def get_by_id(db: AsyncSession, user_id: str) -> Optional[User]:
        """
        Get user by ID.
        Returns None if not found (caller decides what that means).
        """
        result = await db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_or_fail(db: AsyncSession, user_id: str) -> User:
        user = await UserService.get_by_id(db, user_id)
        if not user:
            raise UserNotFoundError()
        return user

    @staticmethod
    async def exists(db: AsyncSession, user_id: str) -> bool:
        result = await db.execute(select(User.id).where(User.id == user_id))
        return result.scalar_one_or_none() is not None

    @staticmethod
    async def get_many(db: AsyncSession, user_ids: list[str]) -> list[User]:
        if not user_ids:
            return []
        result = await db.execute(select(User).where(User.id.in_(user_ids)))
        return result.scalars().all()

    @staticmethod
    async def signup(db: AsyncSession, name: str, username: str, email: str, password: str) -> User:
        """
        Create a user with a hashed password.

        Username and email are stored lowercased so that login lookups are
        case-insensitive.
        """
        name = (name or "").strip()
        username = (username or "").strip().lower()
        email = (email or "").strip().lower()

        if not name or not username or not email or not password:
            raise InvalidInputError("All fields required")
        if "@" in username:
            raise InvalidInputError("Username cannot contain @ symbol")
        if "@" not in email:
            raise InvalidInputError("Invalid email")
        if len(name) > USER_NAME_MAX_LENGTH:
            raise InvalidInputError(f"Name too long (max {USER_NAME_MAX_LENGTH})")
        if len(username) > USERNAME_MAX_LENGTH:
            raise InvalidInputError(f"Username too long (max {USERNAME_MAX_LENGTH})")
        if len(email) > EMAIL_MAX_LENGTH:
            raise InvalidInputError(f"Email too long (max {EMAIL_MAX_LENGTH})")

        existing = await db.execute(
            select(User.id).where(or_(User.email == email, User.username == username))
        )
        if existing.first():
            raise DuplicateUserError()

        user = User(
            name=name,
            username=username,
            email=email,
            password_hash=hash_password(password),
        )
        db.add(user)
        try:
            await db.commit()
        except IntegrityError:
            # Lost a race against a concurrent signup with the same handle
            await db.rollback()
            raise DuplicateUserError()
        await db.refresh(user)

        logger.info(f"User signed up: {user.username} ({user.id})")
        return user

    @staticmethod
    async def authenticate(db: AsyncSession, email_or_username: str, password: str) -> User:
        """
        Resolve a login identifier and check the password.
        Every failure raises the same InvalidCredentialsError.
        """
        identifier = (email_or_username or "").strip().lower()
        if not identifier or not password:
            raise InvalidInputError("Missing credentials")

        column = User.email if "@" in identifier else User.username
        result = await db.execute(select(User).where(column == identifier))
        user = result.scalar_one_or_none()

        if not user or not verify_password(password, user.password_hash):
            logger.warning("Failed login attempt")
            raise InvalidCredentialsError()
        return user


user_service = UserService()

"""
Auth Service - Password hashing and JWT handling

Passwords are hashed with passlib (pbkdf2_sha256, pure python, no native
extension needed). Tokens are HS256 JWTs whose subject is the user id.
"""
from datetime import datetime, timedelta, UTC
from typing import Optional

from jose import jwt, JWTError
from passlib.context import CryptContext

from wishnest.config.settings import settings

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(subject: str, expires_delta: Optional[timedelta] = None) -> str:
    if expires_delta is None:
        expires_delta = timedelta(days=settings.JWT_EXP_DAYS)
    expire = datetime.now(UTC) + expires_delta
    to_encode = {"sub": subject, "exp": int(expire.timestamp())}
    encoded_jwt = jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    return encoded_jwt


def decode_token(token: str) -> Optional[dict]:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        return payload
    except JWTError:
        return None

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from wishnest.api.deps import get_current_user
from wishnest.models.database import get_db
from wishnest.models.user import User
from wishnest.schemas.user import (
    SignupRequest,
    LoginRequest,
    AuthResponse,
    UserResponse,
    MeResponse,
    PublicUser,
    PublicUserResponse,
)
from wishnest.services.auth_service import create_access_token
from wishnest.services.user_service import user_service

router = APIRouter()


def _auth_response(user: User, message: str) -> AuthResponse:
    token = create_access_token(str(user.id))
    return AuthResponse(message=message, token=token, user=UserResponse(**user.to_dict()))


@router.post("/auth/signup", response_model=AuthResponse, status_code=201)
async def signup(request: SignupRequest, db: AsyncSession = Depends(get_db)):
    user = await user_service.signup(
        db,
        name=request.name,
        username=request.username,
        email=request.email,
        password=request.password,
    )
    return _auth_response(user, "User created")


@router.post("/auth/login", response_model=AuthResponse)
async def login(request: LoginRequest, db: AsyncSession = Depends(get_db)):
    user = await user_service.authenticate(db, request.email_or_username, request.password)
    return _auth_response(user, "Logged in")


@router.get("/auth/me", response_model=MeResponse)
async def me(current_user: User = Depends(get_current_user)):
    return MeResponse(user=UserResponse(**current_user.to_dict()))


@router.get("/users/{user_id}", response_model=PublicUserResponse)
async def get_user(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    user = await user_service.get_or_fail(db, user_id)
    return PublicUserResponse(user=PublicUser(**user.to_public_dict()))

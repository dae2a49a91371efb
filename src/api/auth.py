"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_current_user, get_identity_service
from src.models.user import User
from src.schemas.auth import (
    AuthResponse,
    CurrentUserResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from src.services.auth import IdentityService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserRegister,
    identity: Annotated[IdentityService, Depends(get_identity_service)],
):
    """Register a new user."""
    user, token = identity.register(user_data.email, user_data.username, user_data.password)

    return AuthResponse(
        message="User registered successfully",
        user=UserResponse.model_validate(user),
        token=token,
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    identity: Annotated[IdentityService, Depends(get_identity_service)],
):
    """Login with email and password."""
    user, token = identity.login(credentials.email, credentials.password)

    return AuthResponse(
        message="Login successful",
        user=UserResponse.model_validate(user),
        token=token,
    )


@router.get("/me", response_model=CurrentUserResponse)
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return CurrentUserResponse(user=UserResponse.model_validate(current_user))

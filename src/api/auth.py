"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import CurrentUser, DbSession, get_app_settings
from src.config import Settings
from src.exceptions import NotAuthenticated
from src.schemas.auth import (
    AuthResponse,
    ProfileUpdate,
    UserEnvelope,
    UserLogin,
    UserRegister,
    UserResponse,
)
from src.services.auth import authenticate_user, create_access_token, create_user, update_profile

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    db: DbSession,
    settings: Annotated[Settings, Depends(get_app_settings)],
):
    """Register a new user. New accounts always get the user role."""
    user = create_user(db, user_data.email, user_data.password, user_data.name)

    return AuthResponse(
        message="User created successfully",
        user=UserResponse.model_validate(user),
        token=create_access_token(user.id, settings),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    db: DbSession,
    settings: Annotated[Settings, Depends(get_app_settings)],
):
    """Login with email and password."""
    user = authenticate_user(db, credentials.email, credentials.password)

    if not user:
        raise NotAuthenticated("Incorrect email or password")
    if not user.is_active:
        raise NotAuthenticated("Account is deactivated")

    return AuthResponse(
        message="Login successful",
        user=UserResponse.model_validate(user),
        token=create_access_token(user.id, settings),
    )


@router.get("/profile", response_model=UserEnvelope)
def get_profile(current_user: CurrentUser):
    """Get current user information."""
    return UserEnvelope(user=UserResponse.model_validate(current_user))


@router.put("/profile", response_model=UserEnvelope)
def put_profile(
    changes: ProfileUpdate,
    current_user: CurrentUser,
    db: DbSession,
):
    """Update the caller's name and/or email."""
    user = update_profile(db, current_user, changes)
    return UserEnvelope(message="Profile updated successfully", user=UserResponse.model_validate(user))

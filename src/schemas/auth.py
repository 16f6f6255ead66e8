"""Authentication schemas."""

from datetime import datetime

from pydantic import EmailStr, Field

from src.models.enums import UserRole
from src.schemas.common import CamelModel


class UserRegister(CamelModel):
    """User registration request."""

    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=6, max_length=128)


class UserLogin(CamelModel):
    """User login request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class ProfileUpdate(CamelModel):
    """Profile update; only supplied fields are changed."""

    name: str | None = Field(None, min_length=2, max_length=100)
    email: EmailStr | None = Field(None, max_length=255)


class UserResponse(CamelModel):
    """User information response."""

    id: int
    email: str
    name: str
    role: UserRole
    is_active: bool
    created_at: datetime
    updated_at: datetime


class AuthResponse(CamelModel):
    """Authentication response with token and user info."""

    message: str
    user: UserResponse
    token: str


class UserEnvelope(CamelModel):
    message: str | None = None
    user: UserResponse

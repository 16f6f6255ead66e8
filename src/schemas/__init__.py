"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import AuthResponse, ProfileUpdate, UserLogin, UserRegister, UserResponse
from src.schemas.common import PageParams, Pagination
from src.schemas.evaluation import EvaluationCreate, EvaluationResponse, EvaluationUpdate
from src.schemas.item import ImageRecord, ItemCreate, ItemResponse, ItemUpdate
from src.schemas.user import UserStatusUpdate

__all__ = [
    "UserRegister",
    "UserLogin",
    "ProfileUpdate",
    "UserResponse",
    "AuthResponse",
    "Pagination",
    "PageParams",
    "ItemCreate",
    "ItemUpdate",
    "ItemResponse",
    "ImageRecord",
    "EvaluationCreate",
    "EvaluationUpdate",
    "EvaluationResponse",
    "UserStatusUpdate",
]

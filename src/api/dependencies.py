"""FastAPI dependencies for authentication, settings and services."""

from typing import Annotated

from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.config import Settings
from src.database import get_db
from src.models.enums import UserRole
from src.models.user import User
from src.schemas.common import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PageParams
from src.services.auth import authenticate, authenticate_optional, require_role
from src.services.evaluation_service import EvaluationService
from src.services.image_storage import ImageStorage
from src.services.item_service import ItemService

security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Settings the application was built with."""
    return request.app.state.settings


def _token(credentials: HTTPAuthorizationCredentials | None) -> str | None:
    return credentials.credentials if credentials else None


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> User:
    """Get the current authenticated user from JWT token."""
    return authenticate(db, _token(credentials), settings)


def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> User | None:
    """Get the caller if a valid token was sent, otherwise None."""
    return authenticate_optional(db, _token(credentials), settings)


def get_admin_user(current_user: Annotated[User, Depends(get_current_user)]) -> User:
    """Get the current user, requiring the admin role."""
    require_role(current_user.role, UserRole.ADMIN)
    return current_user


def get_page_params(
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = DEFAULT_PAGE_SIZE,
) -> PageParams:
    return PageParams(page=page, limit=limit)


def get_image_storage(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> ImageStorage:
    return ImageStorage(settings)


def get_item_service(
    db: Annotated[Session, Depends(get_db)],
    storage: Annotated[ImageStorage, Depends(get_image_storage)],
) -> ItemService:
    """Get item service with dependencies."""
    return ItemService(db, storage)


def get_evaluation_service(
    db: Annotated[Session, Depends(get_db)],
) -> EvaluationService:
    """Get evaluation service with dependencies."""
    return EvaluationService(db)


DbSession = Annotated[Session, Depends(get_db)]
CurrentUser = Annotated[User, Depends(get_current_user)]
OptionalUser = Annotated[User | None, Depends(get_optional_user)]
AdminUser = Annotated[User, Depends(get_admin_user)]
Pages = Annotated[PageParams, Depends(get_page_params)]

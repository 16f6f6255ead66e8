"""User administration API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Query
from sqlalchemy.orm import Session

from src.api.dependencies import AdminUser, DbSession, Pages
from src.api.projections import item_evaluation_summary
from src.exceptions import NotFound
from src.models.enums import UserRole
from src.models.user import User
from src.schemas.auth import UserEnvelope, UserResponse
from src.schemas.user import (
    UserDetail,
    UserDetailEnvelope,
    UserItemDetail,
    UserListEntry,
    UserListResponse,
    UserStatsResponse,
    UserStatusUpdate,
)
from src.services import queries

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


def get_user_or_404(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise NotFound("User not found")
    return user


@router.get("", response_model=UserListResponse)
def list_users(
    admin: AdminUser,
    db: DbSession,
    pages: Pages,
    role: Annotated[UserRole | None, Query()] = None,
    is_active: Annotated[bool | None, Query(alias="isActive")] = None,
):
    """List accounts with a summary of their items."""
    users, pagination = queries.list_users(db, pages, role=role, is_active=is_active)
    return UserListResponse(
        users=[UserListEntry.model_validate(user) for user in users],
        pagination=pagination,
    )


@router.get("/stats", response_model=UserStatsResponse)
def get_user_stats(admin: AdminUser, db: DbSession):
    return UserStatsResponse(stats=queries.user_stats(db))


@router.get("/{user_id}", response_model=UserDetailEnvelope)
def get_user(user_id: int, admin: AdminUser, db: DbSession):
    """Get an account with its items and their evaluations."""
    user = get_user_or_404(db, user_id)
    detail = UserDetail(
        **UserResponse.model_validate(user).model_dump(),
        items=[
            UserItemDetail(
                id=item.id,
                title=item.title,
                status=item.status,
                brand=item.brand,
                model=item.model,
                evaluation=item_evaluation_summary(item.evaluation),
            )
            for item in user.items
        ],
    )
    return UserDetailEnvelope(user=detail)


@router.put("/{user_id}/status", response_model=UserEnvelope)
def update_user_status(user_id: int, body: UserStatusUpdate, admin: AdminUser, db: DbSession):
    """Activate or deactivate an account."""
    user = get_user_or_404(db, user_id)
    user.is_active = body.is_active
    db.commit()
    db.refresh(user)

    state = "activated" if user.is_active else "deactivated"
    logger.info(f"User {user.id} {state} by admin {admin.id}")
    return UserEnvelope(message=f"User {state} successfully", user=UserResponse.model_validate(user))


@router.put("/{user_id}/promote", response_model=UserEnvelope)
def promote_user(user_id: int, admin: AdminUser, db: DbSession):
    """Grant the admin role."""
    user = get_user_or_404(db, user_id)
    user.role = UserRole.ADMIN
    db.commit()
    db.refresh(user)

    logger.info(f"User {user.id} promoted to admin by {admin.id}")
    return UserEnvelope(
        message="User promoted to admin successfully", user=UserResponse.model_validate(user)
    )

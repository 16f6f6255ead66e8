"""User administration schemas."""

from src.models.enums import ItemStatus
from src.schemas.auth import UserResponse
from src.schemas.common import CamelModel, Pagination
from src.schemas.item import ItemEvaluationSummary


class UserStatusUpdate(CamelModel):
    """Activate or deactivate an account."""

    is_active: bool


class UserItemSummary(CamelModel):
    id: int
    title: str
    status: ItemStatus


class UserListEntry(UserResponse):
    items: list[UserItemSummary]


class UserListResponse(CamelModel):
    users: list[UserListEntry]
    pagination: Pagination


class UserItemDetail(UserItemSummary):
    brand: str
    model: str
    evaluation: ItemEvaluationSummary | None = None


class UserDetail(UserResponse):
    items: list[UserItemDetail]


class UserDetailEnvelope(CamelModel):
    user: UserDetail


class UserStats(CamelModel):
    total: int
    active: int
    inactive: int
    admins: int
    regular: int


class UserStatsResponse(CamelModel):
    stats: UserStats

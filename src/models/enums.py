"""Enums for model fields."""

from enum import Enum


class UserRole(str, Enum):
    """Roles a user account can hold."""

    USER = "user"
    ADMIN = "admin"


class ItemStatus(str, Enum):
    """Lifecycle state of a submitted item, projected from its evaluation."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class EvaluationResult(str, Enum):
    """Verdict an administrator can issue for an item."""

    AUTHENTIC = "authentic"
    FAKE = "fake"
    INCONCLUSIVE = "inconclusive"


def enum_values(enum_cls: type[Enum]) -> list[str]:
    """Persist enum values rather than member names."""
    return [member.value for member in enum_cls]

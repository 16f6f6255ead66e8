"""SQLAlchemy models."""

from src.models.evaluation import Evaluation
from src.models.item import Item
from src.models.user import User

__all__ = [
    "User",
    "Item",
    "Evaluation",
]

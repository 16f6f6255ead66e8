"""User model."""

from sqlalchemy import Boolean, Column, Enum, Integer, String
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.enums import UserRole, enum_values
from src.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication, item ownership and evaluation authorship."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(100), nullable=False)
    role = Column(
        Enum(UserRole, values_callable=enum_values, native_enum=False, length=20),
        nullable=False,
        default=UserRole.USER,
    )
    is_active = Column(Boolean, nullable=False, default=True)

    # Relationships
    items = relationship("Item", back_populates="owner", order_by="Item.id")
    evaluations = relationship("Evaluation", back_populates="evaluator")

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

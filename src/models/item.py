"""Item model."""

from sqlalchemy import JSON, Column, Date, Enum, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.enums import ItemStatus, enum_values
from src.models.mixins import TimestampMixin


class Item(Base, TimestampMixin):
    """A physical good submitted for authenticity review."""

    __tablename__ = "items"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    brand = Column(String(100), nullable=False)
    model = Column(String(100), nullable=False)
    size = Column(String(100), nullable=True)
    color = Column(String(100), nullable=True)
    purchase_price = Column(Numeric(10, 2), nullable=True)
    purchase_date = Column(Date, nullable=True)
    purchase_location = Column(String(100), nullable=True)
    # Image records: [{"filename": ..., "original_name": ..., "path": ..., "size": ...}, ...]
    images = Column(JSON, nullable=False, default=list)
    status = Column(
        Enum(ItemStatus, values_callable=enum_values, native_enum=False, length=20),
        nullable=False,
        default=ItemStatus.PENDING,
        index=True,
    )

    # Relationships
    owner = relationship("User", back_populates="items")
    evaluation = relationship(
        "Evaluation",
        back_populates="item",
        uselist=False,
        cascade="all, delete-orphan",
    )

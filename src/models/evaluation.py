"""Evaluation model."""

from sqlalchemy import JSON, CheckConstraint, Column, Enum, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.enums import EvaluationResult, enum_values
from src.models.mixins import TimestampMixin


class Evaluation(Base, TimestampMixin):
    """An administrator's verdict on a single item."""

    __tablename__ = "evaluations"
    __table_args__ = (
        CheckConstraint("confidence BETWEEN 1 AND 100", name="ck_evaluations_confidence"),
    )

    id = Column(Integer, primary_key=True, index=True)
    # One evaluation per item
    item_id = Column(Integer, ForeignKey("items.id"), nullable=False, unique=True, index=True)
    evaluator_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    result = Column(
        Enum(EvaluationResult, values_callable=enum_values, native_enum=False, length=20),
        nullable=False,
        index=True,
    )
    confidence = Column(Integer, nullable=False)
    notes = Column(Text, nullable=True)
    evaluation_criteria = Column(JSON, nullable=False, default=dict)

    # Relationships
    item = relationship("Item", back_populates="evaluation")
    evaluator = relationship("User", back_populates="evaluations")

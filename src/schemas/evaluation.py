"""Evaluation schemas."""

from datetime import datetime
from typing import Any

from pydantic import Field, model_validator

from src.models.enums import EvaluationResult, ItemStatus
from src.schemas.common import CamelModel, Pagination
from src.schemas.item import EvaluatorSummary, ImageRecord, OwnerSummary


class EvaluationCreate(CamelModel):
    """Create an evaluation for an item."""

    item_id: int
    result: EvaluationResult
    confidence: int = Field(..., ge=1, le=100)
    notes: str | None = Field(None, max_length=5000)
    evaluation_criteria: dict[str, Any] | None = None


class EvaluationUpdate(CamelModel):
    """Partial evaluation update; only supplied fields are applied."""

    result: EvaluationResult | None = None
    confidence: int | None = Field(None, ge=1, le=100)
    notes: str | None = Field(None, max_length=5000)
    evaluation_criteria: dict[str, Any] | None = None

    @model_validator(mode="after")
    def reject_null_required(self) -> "EvaluationUpdate":
        for field in ("result", "confidence"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class EvaluatedItemSummary(CamelModel):
    """Item embedded in an evaluation response."""

    id: int
    title: str
    brand: str
    model: str
    status: ItemStatus
    images: list[ImageRecord]
    owner: OwnerSummary


class EvaluationResponse(CamelModel):
    """Evaluation response."""

    id: int
    item_id: int
    evaluator_id: int
    result: EvaluationResult
    confidence: int
    notes: str | None
    evaluation_criteria: dict[str, Any]
    item: EvaluatedItemSummary
    evaluator: EvaluatorSummary
    created_at: datetime
    updated_at: datetime


class EvaluationEnvelope(CamelModel):
    message: str | None = None
    evaluation: EvaluationResponse


class EvaluationListResponse(CamelModel):
    evaluations: list[EvaluationResponse]
    pagination: Pagination


class EvaluatorCount(CamelModel):
    evaluator_id: int
    name: str
    count: int


class EvaluationStats(CamelModel):
    total: int
    authentic: int
    fake: int
    inconclusive: int
    by_evaluator: list[EvaluatorCount]


class EvaluationStatsResponse(CamelModel):
    stats: EvaluationStats

"""Item schemas."""

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import Field, field_validator

from src.models.enums import EvaluationResult, ItemStatus
from src.schemas.common import CamelModel, Pagination

OPTIONAL_TEXT_FIELDS = ("description", "size", "color", "purchase_location")


class ImageRecord(CamelModel):
    """Metadata of one stored image."""

    filename: str
    original_name: str
    path: str
    size: int


class OwnerSummary(CamelModel):
    """Owner shown next to an item. Email is hidden from the public projection."""

    id: int
    name: str
    email: str | None = None


class EvaluatorSummary(CamelModel):
    id: int
    name: str


class ItemEvaluationSummary(CamelModel):
    """Evaluation embedded in an item response."""

    id: int
    result: EvaluationResult
    confidence: int
    notes: str | None
    evaluation_criteria: dict[str, Any]
    evaluator: EvaluatorSummary | None = None
    created_at: datetime
    updated_at: datetime


class ItemCreate(CamelModel):
    """Descriptive fields of a new item."""

    title: str = Field(..., min_length=3, max_length=200)
    description: str | None = Field(None, max_length=5000)
    brand: str = Field(..., min_length=2, max_length=100)
    model: str = Field(..., min_length=2, max_length=100)
    size: str | None = Field(None, max_length=100)
    color: str | None = Field(None, max_length=100)
    purchase_price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    purchase_date: date | None = None
    purchase_location: str | None = Field(None, max_length=100)

    @field_validator(*OPTIONAL_TEXT_FIELDS, "purchase_price", "purchase_date", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class ItemUpdate(ItemCreate):
    """Partial item update.

    Only fields present in ``model_fields_set`` are applied. Sending an empty
    value for an optional field clears it; required fields cannot be cleared.
    """

    title: str | None = Field(None, min_length=3, max_length=200)
    brand: str | None = Field(None, min_length=2, max_length=100)
    model: str | None = Field(None, min_length=2, max_length=100)

    @field_validator("title", "brand", "model", mode="after")
    @classmethod
    def required_not_null(cls, v):
        if v is None:
            raise ValueError("field cannot be cleared")
        return v


class ItemResponse(CamelModel):
    """Item response.

    Purchase metadata is ``None`` in the public projection.
    """

    id: int
    title: str
    description: str | None
    brand: str
    model: str
    size: str | None
    color: str | None
    purchase_price: float | None = None
    purchase_date: date | None = None
    purchase_location: str | None = None
    images: list[ImageRecord]
    status: ItemStatus
    user_id: int
    owner: OwnerSummary
    evaluation: ItemEvaluationSummary | None = None
    created_at: datetime
    updated_at: datetime


class ItemEnvelope(CamelModel):
    message: str | None = None
    item: ItemResponse


class ItemListResponse(CamelModel):
    items: list[ItemResponse]
    pagination: Pagination


class ItemStats(CamelModel):
    total: int
    pending: int
    approved: int
    rejected: int


class ItemStatsResponse(CamelModel):
    stats: ItemStats

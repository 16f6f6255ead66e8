"""Fixed-shape projections of ORM rows into response schemas."""

from src.models.evaluation import Evaluation
from src.models.item import Item
from src.models.user import User
from src.schemas.evaluation import EvaluatedItemSummary, EvaluationResponse
from src.schemas.item import (
    EvaluatorSummary,
    ImageRecord,
    ItemEvaluationSummary,
    ItemResponse,
    OwnerSummary,
)
from src.services.item_service import can_manage_item


def owner_summary(user: User, include_email: bool) -> OwnerSummary:
    return OwnerSummary(id=user.id, name=user.name, email=user.email if include_email else None)


def item_evaluation_summary(evaluation: Evaluation | None) -> ItemEvaluationSummary | None:
    if evaluation is None:
        return None
    return ItemEvaluationSummary(
        id=evaluation.id,
        result=evaluation.result,
        confidence=evaluation.confidence,
        notes=evaluation.notes,
        evaluation_criteria=evaluation.evaluation_criteria or {},
        evaluator=EvaluatorSummary(id=evaluation.evaluator.id, name=evaluation.evaluator.name),
        created_at=evaluation.created_at,
        updated_at=evaluation.updated_at,
    )


def item_response(item: Item, viewer: User | None) -> ItemResponse:
    """Full projection for the owner or an admin, public projection otherwise."""
    full = can_manage_item(item, viewer)
    return ItemResponse(
        id=item.id,
        title=item.title,
        description=item.description,
        brand=item.brand,
        model=item.model,
        size=item.size,
        color=item.color,
        purchase_price=item.purchase_price if full else None,
        purchase_date=item.purchase_date if full else None,
        purchase_location=item.purchase_location if full else None,
        images=[ImageRecord.model_validate(image) for image in item.images or []],
        status=item.status,
        user_id=item.user_id,
        owner=owner_summary(item.owner, include_email=full),
        evaluation=item_evaluation_summary(item.evaluation),
        created_at=item.created_at,
        updated_at=item.updated_at,
    )


def evaluation_response(evaluation: Evaluation, viewer: User | None) -> EvaluationResponse:
    item = evaluation.item
    return EvaluationResponse(
        id=evaluation.id,
        item_id=evaluation.item_id,
        evaluator_id=evaluation.evaluator_id,
        result=evaluation.result,
        confidence=evaluation.confidence,
        notes=evaluation.notes,
        evaluation_criteria=evaluation.evaluation_criteria or {},
        item=EvaluatedItemSummary(
            id=item.id,
            title=item.title,
            brand=item.brand,
            model=item.model,
            status=item.status,
            images=[ImageRecord.model_validate(image) for image in item.images or []],
            owner=owner_summary(item.owner, include_email=can_manage_item(item, viewer)),
        ),
        evaluator=EvaluatorSummary(id=evaluation.evaluator.id, name=evaluation.evaluator.name),
        created_at=evaluation.created_at,
        updated_at=evaluation.updated_at,
    )

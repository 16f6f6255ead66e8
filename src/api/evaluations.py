"""Evaluation API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import AdminUser, DbSession, OptionalUser, Pages, get_evaluation_service
from src.api.projections import evaluation_response
from src.models.enums import EvaluationResult
from src.schemas.common import MessageResponse
from src.schemas.evaluation import (
    EvaluationCreate,
    EvaluationEnvelope,
    EvaluationListResponse,
    EvaluationStatsResponse,
    EvaluationUpdate,
)
from src.services import queries
from src.services.evaluation_service import EvaluationService

router = APIRouter(prefix="/api/evaluations", tags=["evaluations"])

Service = Annotated[EvaluationService, Depends(get_evaluation_service)]
ResultFilter = Annotated[EvaluationResult | None, Query()]
EvaluatorFilter = Annotated[int | None, Query(alias="evaluatorId")]


# --- Public browsing ---


@router.get("/public", response_model=EvaluationListResponse)
def list_public_evaluations(
    db: DbSession,
    viewer: OptionalUser,
    pages: Pages,
    result: ResultFilter = None,
    evaluator_id: EvaluatorFilter = None,
):
    """Browse published verdicts without logging in."""
    evaluations, pagination = queries.list_evaluations(
        db, pages, result=result, evaluator_id=evaluator_id
    )
    return EvaluationListResponse(
        evaluations=[evaluation_response(e, viewer) for e in evaluations],
        pagination=pagination,
    )


@router.get("/public/{evaluation_id}", response_model=EvaluationEnvelope)
def get_public_evaluation(evaluation_id: int, viewer: OptionalUser, service: Service):
    evaluation = service.get_evaluation(evaluation_id)
    return EvaluationEnvelope(evaluation=evaluation_response(evaluation, viewer))


# --- Administration ---


@router.get("/stats", response_model=EvaluationStatsResponse)
def get_evaluation_stats(admin: AdminUser, db: DbSession):
    """Count evaluations per result and per evaluator."""
    return EvaluationStatsResponse(stats=queries.evaluation_stats(db))


@router.post("", response_model=EvaluationEnvelope, status_code=status.HTTP_201_CREATED)
def create_evaluation(data: EvaluationCreate, admin: AdminUser, service: Service):
    """Issue the verdict for an item that has not been evaluated yet."""
    evaluation = service.submit_evaluation(data, admin)
    return EvaluationEnvelope(
        message="Evaluation created successfully",
        evaluation=evaluation_response(evaluation, admin),
    )


@router.get("", response_model=EvaluationListResponse)
def list_evaluations(
    admin: AdminUser,
    db: DbSession,
    pages: Pages,
    result: ResultFilter = None,
    evaluator_id: EvaluatorFilter = None,
):
    evaluations, pagination = queries.list_evaluations(
        db, pages, result=result, evaluator_id=evaluator_id
    )
    return EvaluationListResponse(
        evaluations=[evaluation_response(e, admin) for e in evaluations],
        pagination=pagination,
    )


@router.get("/my-evaluations", response_model=EvaluationListResponse)
def list_my_evaluations(
    admin: AdminUser,
    db: DbSession,
    pages: Pages,
    result: ResultFilter = None,
):
    """Evaluations authored by the caller."""
    evaluations, pagination = queries.list_evaluations(
        db, pages, result=result, evaluator_id=admin.id
    )
    return EvaluationListResponse(
        evaluations=[evaluation_response(e, admin) for e in evaluations],
        pagination=pagination,
    )


@router.get("/{evaluation_id}", response_model=EvaluationEnvelope)
def get_evaluation(evaluation_id: int, admin: AdminUser, service: Service):
    evaluation = service.get_evaluation(evaluation_id)
    return EvaluationEnvelope(evaluation=evaluation_response(evaluation, admin))


@router.put("/{evaluation_id}", response_model=EvaluationEnvelope)
def update_evaluation(
    evaluation_id: int,
    changes: EvaluationUpdate,
    admin: AdminUser,
    service: Service,
):
    """Revise a verdict; a changed result re-derives the item status."""
    evaluation = service.revise_evaluation(evaluation_id, changes, admin)
    return EvaluationEnvelope(
        message="Evaluation updated successfully",
        evaluation=evaluation_response(evaluation, admin),
    )


@router.delete("/{evaluation_id}", response_model=MessageResponse)
def delete_evaluation(evaluation_id: int, admin: AdminUser, service: Service):
    """Delete a verdict and return its item to pending."""
    service.retract_evaluation(evaluation_id)
    return MessageResponse(message="Evaluation deleted successfully")

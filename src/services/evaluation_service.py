"""Evaluation workflow: verdicts and the item status they project onto."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.exceptions import Conflict, NotFound, PermissionDenied
from src.models.enums import EvaluationResult, ItemStatus, UserRole
from src.models.evaluation import Evaluation
from src.models.item import Item
from src.models.user import User
from src.schemas.evaluation import EvaluationCreate, EvaluationUpdate

logger = logging.getLogger(__name__)

STATUS_BY_RESULT = {
    EvaluationResult.AUTHENTIC: ItemStatus.APPROVED,
    EvaluationResult.FAKE: ItemStatus.REJECTED,
    EvaluationResult.INCONCLUSIVE: ItemStatus.PENDING,
}


def derive_status(result: EvaluationResult | str) -> ItemStatus:
    """Map an evaluation result to the item status it implies.

    Raises ValueError for anything that is not an EvaluationResult value.
    """
    return STATUS_BY_RESULT[EvaluationResult(result)]


class EvaluationService:
    """Create, revise and retract evaluations.

    Every operation writes the evaluation and the item status in one
    transaction, so the item never disagrees with its evaluation.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_evaluation(self, evaluation_id: int) -> Evaluation:
        evaluation = self.db.query(Evaluation).filter(Evaluation.id == evaluation_id).first()
        if evaluation is None:
            raise NotFound("Evaluation not found")
        return evaluation

    def submit_evaluation(self, data: EvaluationCreate, evaluator: User) -> Evaluation:
        """Record the first and only evaluation of an item."""
        item = self.db.query(Item).filter(Item.id == data.item_id).first()
        if item is None:
            raise NotFound("Item not found")

        existing = self.db.query(Evaluation.id).filter(Evaluation.item_id == item.id).first()
        if existing is not None:
            raise Conflict("Item has already been evaluated")

        evaluation = Evaluation(
            item_id=item.id,
            evaluator_id=evaluator.id,
            result=data.result,
            confidence=data.confidence,
            notes=data.notes,
            evaluation_criteria=data.evaluation_criteria or {},
        )
        self.db.add(evaluation)
        item.status = derive_status(data.result)
        self._commit_or_conflict()

        self.db.refresh(evaluation)
        logger.info(
            f"Evaluation {evaluation.id} created for item {item.id} by user {evaluator.id}: "
            f"{evaluation.result.value} -> item status {item.status.value}"
        )
        return evaluation

    def revise_evaluation(
        self, evaluation_id: int, changes: EvaluationUpdate, caller: User
    ) -> Evaluation:
        """Apply supplied fields; re-derive the item status if the result changed."""
        evaluation = self.get_evaluation(evaluation_id)
        if evaluation.evaluator_id != caller.id and caller.role != UserRole.ADMIN:
            raise PermissionDenied("Only the original evaluator or an administrator may do this")

        supplied = changes.model_dump(exclude_unset=True)
        previous_result = evaluation.result

        if "result" in supplied:
            evaluation.result = changes.result
        if "confidence" in supplied:
            evaluation.confidence = changes.confidence
        if "notes" in supplied:
            evaluation.notes = changes.notes
        if "evaluation_criteria" in supplied:
            evaluation.evaluation_criteria = changes.evaluation_criteria or {}

        if evaluation.result != previous_result:
            evaluation.item.status = derive_status(evaluation.result)

        self.db.commit()
        self.db.refresh(evaluation)
        logger.info(
            f"Evaluation {evaluation.id} revised by user {caller.id}: "
            f"item {evaluation.item_id} status {evaluation.item.status.value}"
        )
        return evaluation

    def retract_evaluation(self, evaluation_id: int) -> Item:
        """Delete the evaluation and put its item back to pending."""
        evaluation = self.get_evaluation(evaluation_id)
        item = evaluation.item

        item.status = ItemStatus.PENDING
        self.db.delete(evaluation)
        self.db.commit()
        self.db.refresh(item)

        logger.info(f"Evaluation {evaluation_id} deleted; item {item.id} reset to pending")
        return item

    def _commit_or_conflict(self) -> None:
        try:
            self.db.commit()
        except IntegrityError:
            # Unique item_id lost a race with a concurrent evaluation
            self.db.rollback()
            raise Conflict("Item has already been evaluated") from None

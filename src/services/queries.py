"""Read-side queries: filtered pages and aggregate counts."""

from sqlalchemy import func
from sqlalchemy.orm import Query, Session, joinedload, selectinload

from src.models.enums import EvaluationResult, ItemStatus, UserRole
from src.models.evaluation import Evaluation
from src.models.item import Item
from src.models.user import User
from src.schemas.common import PageParams, Pagination
from src.schemas.evaluation import EvaluationStats, EvaluatorCount
from src.schemas.item import ItemStats
from src.schemas.user import UserStats


def paginate(query: Query, pages: PageParams) -> tuple[list, Pagination]:
    """Apply offset/limit and return the rows with their pagination summary."""
    total = query.order_by(None).count()
    rows = query.offset(pages.offset).limit(pages.limit).all()
    return rows, Pagination.build(total, pages.page, pages.limit)


def list_items(
    db: Session,
    pages: PageParams,
    status: ItemStatus | None = None,
    user_id: int | None = None,
) -> tuple[list[Item], Pagination]:
    """Items newest first, with owner and evaluation loaded."""
    query = db.query(Item).options(
        joinedload(Item.owner),
        joinedload(Item.evaluation).joinedload(Evaluation.evaluator),
    )
    if status is not None:
        query = query.filter(Item.status == status)
    if user_id is not None:
        query = query.filter(Item.user_id == user_id)
    return paginate(query.order_by(Item.created_at.desc(), Item.id.desc()), pages)


def list_evaluations(
    db: Session,
    pages: PageParams,
    result: EvaluationResult | None = None,
    evaluator_id: int | None = None,
) -> tuple[list[Evaluation], Pagination]:
    """Evaluations newest first, with item, item owner and evaluator loaded."""
    query = db.query(Evaluation).options(
        joinedload(Evaluation.item).joinedload(Item.owner),
        joinedload(Evaluation.evaluator),
    )
    if result is not None:
        query = query.filter(Evaluation.result == result)
    if evaluator_id is not None:
        query = query.filter(Evaluation.evaluator_id == evaluator_id)
    return paginate(query.order_by(Evaluation.created_at.desc(), Evaluation.id.desc()), pages)


def list_users(
    db: Session,
    pages: PageParams,
    role: UserRole | None = None,
    is_active: bool | None = None,
) -> tuple[list[User], Pagination]:
    query = db.query(User).options(selectinload(User.items))
    if role is not None:
        query = query.filter(User.role == role)
    if is_active is not None:
        query = query.filter(User.is_active.is_(is_active))
    return paginate(query.order_by(User.created_at.desc(), User.id.desc()), pages)


def item_stats(db: Session) -> ItemStats:
    counts = dict(db.query(Item.status, func.count(Item.id)).group_by(Item.status).all())
    return ItemStats(
        total=sum(counts.values()),
        pending=counts.get(ItemStatus.PENDING, 0),
        approved=counts.get(ItemStatus.APPROVED, 0),
        rejected=counts.get(ItemStatus.REJECTED, 0),
    )


def evaluation_stats(db: Session) -> EvaluationStats:
    counts = dict(
        db.query(Evaluation.result, func.count(Evaluation.id)).group_by(Evaluation.result).all()
    )
    count_column = func.count(Evaluation.id).label("count")
    by_evaluator = (
        db.query(Evaluation.evaluator_id, User.name, count_column)
        .join(User, User.id == Evaluation.evaluator_id)
        .group_by(Evaluation.evaluator_id, User.name)
        .order_by(count_column.desc(), Evaluation.evaluator_id)
        .all()
    )
    return EvaluationStats(
        total=sum(counts.values()),
        authentic=counts.get(EvaluationResult.AUTHENTIC, 0),
        fake=counts.get(EvaluationResult.FAKE, 0),
        inconclusive=counts.get(EvaluationResult.INCONCLUSIVE, 0),
        by_evaluator=[
            EvaluatorCount(evaluator_id=evaluator_id, name=name, count=count)
            for evaluator_id, name, count in by_evaluator
        ],
    )


def user_stats(db: Session) -> UserStats:
    total = db.query(func.count(User.id)).scalar()
    active = db.query(func.count(User.id)).filter(User.is_active.is_(True)).scalar()
    admins = db.query(func.count(User.id)).filter(User.role == UserRole.ADMIN).scalar()
    return UserStats(
        total=total,
        active=active,
        inactive=total - active,
        admins=admins,
        regular=total - admins,
    )

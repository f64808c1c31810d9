from collections import Counter
from decimal import Decimal

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.api.deps import get_current_admin
from app.db.session import get_db
from app.models.plan import SubscriptionPlan
from app.models.user import User
from app.models.user_subscription import UserSubscription
from app.schemas.dashboard import StatsOut, GrowthOut, PlanStatusOut
from app.utils.dt import as_utc_aware, utcnow

router = APIRouter(prefix="/dashboard", tags=["dashboard"], dependencies=[Depends(get_current_admin)])


def _count(db: Session, model, status: str | None = None) -> int:
    q = db.query(func.count(model.id))
    if status:
        q = q.filter(model.status == status)
    return q.scalar() or 0


@router.get("/stats", response_model=StatsOut)
def stats(db: Session = Depends(get_db)):
    prices = dict(db.query(SubscriptionPlan.id, SubscriptionPlan.price).all())

    # Assignments whose plan was deleted contribute nothing
    monthly = Decimal("0")
    active_plan_ids = db.query(UserSubscription.plan_id).filter(UserSubscription.status == "active").all()
    for (plan_id,) in active_plan_ids:
        price = prices.get(plan_id)
        if price is not None:
            monthly += Decimal(str(price))

    return StatsOut(
        total_users=_count(db, User),
        active_users=_count(db, User, "active"),
        total_plans=_count(db, SubscriptionPlan),
        active_plans=_count(db, SubscriptionPlan, "active"),
        total_subscriptions=_count(db, UserSubscription),
        active_subscriptions=_count(db, UserSubscription, "active"),
        monthly_revenue=float(monthly),
        annual_revenue=float(monthly * 12),
        last_update=utcnow(),
    )


@router.get("/growth", response_model=GrowthOut)
def growth(db: Session = Depends(get_db)):
    """Per-day creation counts of users and plans, on a shared date axis."""
    user_days = Counter(
        as_utc_aware(created).date().isoformat()
        for (created,) in db.query(User.created_at).all()
    )
    plan_days = Counter(
        as_utc_aware(created).date().isoformat()
        for (created,) in db.query(SubscriptionPlan.created_at).all()
    )

    labels = sorted(set(user_days) | set(plan_days))
    return GrowthOut(
        labels=labels,
        users=[user_days.get(day, 0) for day in labels],
        plans=[plan_days.get(day, 0) for day in labels],
    )


@router.get("/plan-status", response_model=PlanStatusOut)
def plan_status(db: Session = Depends(get_db)):
    return PlanStatusOut(
        active=_count(db, SubscriptionPlan, "active"),
        inactive=_count(db, SubscriptionPlan, "inactive"),
    )

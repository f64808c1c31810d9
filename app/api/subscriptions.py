import logging
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api.deps import get_current_admin
from app.db.session import get_db
from app.models.discount import Discount
from app.models.plan import SubscriptionPlan
from app.models.user import User
from app.models.user_subscription import UserSubscription
from app.schemas.subscription import QuoteIn, AssignIn, QuoteOut, UserSubscriptionOut
from app.services.pricing import (
    DiscountSource,
    ManualDiscount,
    NoDiscount,
    PriceQuote,
    SavedDiscount,
    quote_for,
    validate_base_price,
    validate_discount_percentage,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"], dependencies=[Depends(get_current_admin)])


# ---------------------------
# helpers
# ---------------------------

def _get_plan(db: Session, plan_id: int) -> SubscriptionPlan:
    plan = db.get(SubscriptionPlan, plan_id)
    if not plan:
        raise HTTPException(status_code=404, detail="Plan not found")
    return plan


def _resolve_discount_source(db: Session, payload: QuoteIn, plan: SubscriptionPlan) -> DiscountSource:
    if payload.discount_id is not None:
        discount = db.get(Discount, payload.discount_id)
        if not discount or discount.status != "active":
            raise HTTPException(status_code=404, detail="Discount not found")
        return SavedDiscount(discount)

    if payload.manual_discount_percentage is not None:
        return ManualDiscount(payload.manual_discount_percentage)

    # nothing chosen: fall back to the plan's default, if it is still active
    if plan.default_discount_id is not None:
        default = db.get(Discount, plan.default_discount_id)
        if default and default.status == "active":
            return SavedDiscount(default)

    return NoDiscount()


def _quote(plan: SubscriptionPlan, duration_months: int, source: DiscountSource) -> PriceQuote:
    # Stored rows may predate the current validation rules; InvalidArgument becomes a 422
    price = validate_base_price(plan.price)
    if isinstance(source, SavedDiscount):
        validate_discount_percentage(source.percentage)
    return quote_for(price, duration_months, source)


# ---------------------------
# endpoints
# ---------------------------

@router.post("/quote", response_model=QuoteOut)
def quote(payload: QuoteIn, db: Session = Depends(get_db)):
    plan = _get_plan(db, payload.plan_id)
    source = _resolve_discount_source(db, payload, plan)
    q = _quote(plan, payload.duration_months, source)
    return QuoteOut.from_quote(plan.id, payload.duration_months, q)


@router.post("", response_model=UserSubscriptionOut, status_code=201)
def assign_subscription(payload: AssignIn, db: Session = Depends(get_db)):
    user = db.get(User, payload.user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    plan = _get_plan(db, payload.plan_id)
    source = _resolve_discount_source(db, payload, plan)
    q = _quote(plan, payload.duration_months, source)

    # A user holds one active assignment at a time
    current = db.query(UserSubscription).filter(
        UserSubscription.user_id == user.id,
        UserSubscription.status == "active",
    ).all()
    for sub in current:
        sub.status = "inactive"

    sub = UserSubscription(
        user_id=user.id,
        plan_id=plan.id,
        duration_months=payload.duration_months,
        status="active",
        original_price=q.original_price,
        final_price=q.final_price,
        total_discount=q.total_discount,
        effective_discount_percentage=q.discount_percentage,
    )

    if isinstance(source, SavedDiscount):
        sub.discount_id = source.discount.id
        sub.discount_name = source.discount.name
        sub.discount_percentage = source.percentage
    elif isinstance(source, ManualDiscount):
        sub.discount_percentage = source.percentage
        sub.discount_is_manual = True

    db.add(sub)
    db.commit()
    db.refresh(sub)

    logger.info(
        "Assigned plan %s to user %s for %s months (final %s)",
        plan.id, user.id, payload.duration_months, q.final_price,
    )
    return sub


@router.post("/{subscription_id}/remove", response_model=UserSubscriptionOut)
def remove_subscription(subscription_id: int, db: Session = Depends(get_db)):
    sub = db.get(UserSubscription, subscription_id)
    if not sub:
        raise HTTPException(status_code=404, detail="Subscription not found")

    sub.status = "inactive"
    db.commit()
    db.refresh(sub)
    logger.info("Removed subscription %s from user %s", sub.id, sub.user_id)
    return sub


@router.get("", response_model=list[UserSubscriptionOut])
def list_subscriptions(status: Literal["active", "inactive"] | None = None, db: Session = Depends(get_db)):
    q = db.query(UserSubscription)
    if status:
        q = q.filter(UserSubscription.status == status)
    return q.order_by(UserSubscription.created_at.desc(), UserSubscription.id.desc()).all()

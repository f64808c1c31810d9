import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.api.deps import get_current_admin
from app.db.session import get_db
from app.models.discount import Discount
from app.models.plan import SubscriptionPlan
from app.schemas.plan import PlanCreate, PlanOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/plans", tags=["plans"], dependencies=[Depends(get_current_admin)])

# Newest plans first
@router.get("", response_model=list[PlanOut])
def list_plans(db: Session = Depends(get_db)):
    return db.query(SubscriptionPlan).order_by(SubscriptionPlan.created_at.desc(), SubscriptionPlan.id.desc()).all()

@router.post("", response_model=PlanOut, status_code=201)
def create_plan(payload: PlanCreate, db: Session = Depends(get_db)):
    existing = db.query(SubscriptionPlan).filter(SubscriptionPlan.plan_name == payload.plan_name).first()
    if existing:
        raise HTTPException(status_code=400, detail="A plan with this name already exists")

    if payload.default_discount_id is not None:
        discount = db.get(Discount, payload.default_discount_id)
        if not discount or discount.status != "active":
            raise HTTPException(status_code=404, detail="Discount not found")

    plan = SubscriptionPlan(
        plan_name=payload.plan_name,
        price=payload.price,
        features=payload.features,
        duration_months=payload.duration_months,
        start_date=payload.start_date or date.today(),
        status=payload.status,
        default_discount_id=payload.default_discount_id,
    )
    db.add(plan)
    try:
        db.commit()
    except IntegrityError:
        # lost a race against another create with the same name
        db.rollback()
        raise HTTPException(status_code=400, detail="A plan with this name already exists")
    db.refresh(plan)

    logger.info("Created plan %s (%s)", plan.id, plan.plan_name)
    return plan

@router.delete("/{plan_id}")
def delete_plan(plan_id: int, db: Session = Depends(get_db)):
    plan = db.get(SubscriptionPlan, plan_id)
    if not plan:
        raise HTTPException(status_code=404, detail="Plan not found")

    db.delete(plan)
    db.commit()
    logger.info("Deleted plan %s", plan_id)
    return {"message": "Plan deleted"}

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api.deps import get_current_admin
from app.db.session import get_db
from app.models.discount import Discount
from app.schemas.discount import DiscountCreate, DiscountOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/discounts", tags=["discounts"], dependencies=[Depends(get_current_admin)])

def _active_discounts(db: Session) -> list[Discount]:
    return db.query(Discount).filter(Discount.status == "active").order_by(Discount.id).all()

@router.get("", response_model=list[DiscountOut])
def list_discounts(db: Session = Depends(get_db)):
    return _active_discounts(db)

@router.post("", response_model=DiscountOut, status_code=201)
def create_discount(payload: DiscountCreate, db: Session = Depends(get_db)):
    discount = Discount(
        name=payload.name,
        percentage=payload.percentage,
        description=payload.description or "",
        status="active",
    )
    db.add(discount)
    db.commit()
    db.refresh(discount)
    logger.info("Created discount %s (%s%%)", discount.id, discount.percentage)
    return discount

# Soft delete: returns the refreshed active list
@router.post("/{discount_id}/deactivate", response_model=list[DiscountOut])
def deactivate_discount(discount_id: int, db: Session = Depends(get_db)):
    discount = db.get(Discount, discount_id)
    if not discount:
        raise HTTPException(status_code=404, detail="Discount not found")

    discount.status = "inactive"
    db.commit()
    logger.info("Deactivated discount %s", discount_id)
    return _active_discounts(db)

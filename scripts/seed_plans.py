from sqlalchemy.orm import Session
from app.db.init_db import init_db
from app.db.session import SessionLocal
from app.models.discount import Discount
from app.models.plan import SubscriptionPlan

PLANS = [
    {"plan_name": "Basic", "price": 199.00, "duration_months": 1,
      "features": ["Single device", "Standard support"]},

    {"plan_name": "Standard Quarterly", "price": 179.00, "duration_months": 3,
      "features": ["Two devices", "Standard support", "Offline downloads"]},

    {"plan_name": "Premium Half-Yearly", "price": 299.00, "duration_months": 6,
      "features": ["Four devices", "Priority support", "Offline downloads"]},

    {"plan_name": "Premium Annual", "price": 249.00, "duration_months": 12,
      "features": ["Four devices", "Priority support", "Offline downloads", "Early access"]},
]

DISCOUNTS = [
    {"name": "Festive", "percentage": 10, "description": "Seasonal festival offer"},
    {"name": "Staff", "percentage": 50, "description": "Internal staff accounts"},
]

def upsert_plan(db: Session, data: dict) -> SubscriptionPlan:
    plan = db.query(SubscriptionPlan).filter(SubscriptionPlan.plan_name == data["plan_name"]).first()
    if plan:
        for k, v in data.items():
            setattr(plan, k, v)
        return plan

    plan = SubscriptionPlan(**data)
    db.add(plan)
    return plan

def upsert_discount(db: Session, data: dict) -> Discount:
    discount = db.query(Discount).filter(Discount.name == data["name"]).first()
    if discount:
        for k, v in data.items():
            setattr(discount, k, v)
        return discount

    discount = Discount(**data)
    db.add(discount)
    return discount

def main():
    init_db()
    db = SessionLocal()
    try:
        for data in PLANS:
            upsert_plan(db, data)
        for data in DISCOUNTS:
            upsert_discount(db, data)
        db.commit()
        print("Seeded plans:", [p["plan_name"] for p in PLANS])
        print("Seeded discounts:", [d["name"] for d in DISCOUNTS])
    finally:
        db.close()

if __name__ == "__main__":
    main()

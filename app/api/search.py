from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_current_admin
from app.db.session import get_db
from app.models.plan import SubscriptionPlan
from app.models.user import User
from app.schemas.search import SearchResult
from app.utils.formatters import format_price

router = APIRouter(prefix="/search", tags=["search"], dependencies=[Depends(get_current_admin)])


def _contains(value: str | None, term: str) -> bool:
    return bool(value) and term in value.lower()


@router.get("", response_model=list[SearchResult])
def search(q: str = "", db: Session = Depends(get_db)):
    term = q.strip().lower()
    if not term:
        return []

    results: list[SearchResult] = []

    for user in db.query(User).order_by(User.id).all():
        if _contains(user.full_name, term) or _contains(user.username, term) or _contains(user.email, term):
            results.append(SearchResult(
                id=user.id, type="user", title=user.full_name, subtitle=user.email, link="/users",
            ))

    for plan in db.query(SubscriptionPlan).order_by(SubscriptionPlan.id).all():
        price = format_price(plan.price)
        if (
            _contains(plan.plan_name, term)
            or _contains(price, term)
            or any(_contains(f, term) for f in plan.features or [])
        ):
            results.append(SearchResult(
                id=plan.id, type="plan", title=plan.plan_name,
                subtitle=f"{price} / month", link="/subscriptions",
            ))

    # exact title matches first; sort is stable so the rest keep their order
    results.sort(key=lambda r: r.title.lower() != term)
    return results

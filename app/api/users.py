import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.api.deps import get_current_admin
from app.core.security import hash_password
from app.db.session import get_db
from app.models.plan import SubscriptionPlan
from app.models.user import User
from app.models.user_subscription import UserSubscription
from app.schemas.subscription import UserSubscriptionOut
from app.schemas.user import UserCreate, UserOut, UserWithSubscriptionOut, CurrentSubscriptionOut
from app.utils.dt import as_utc_aware

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"], dependencies=[Depends(get_current_admin)])


def _get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


def _current_subscription(
    subs: list[UserSubscription],
    plans: dict[int, SubscriptionPlan],
) -> CurrentSubscriptionOut | None:
    # subs are newest first; the first active one wins
    active = next((s for s in subs if s.status == "active"), None)
    if not active:
        return None
    plan = plans.get(active.plan_id)
    if not plan:
        return None
    return CurrentSubscriptionOut(
        id=active.id,
        plan_id=plan.id,
        plan_name=plan.plan_name,
        price=float(plan.price),
        status=active.status,
        start_date=as_utc_aware(active.created_at).date(),
    )


@router.get("", response_model=list[UserWithSubscriptionOut])
def list_users(db: Session = Depends(get_db)):
    users = db.query(User).order_by(User.full_name, User.id).all()
    plans = {p.id: p for p in db.query(SubscriptionPlan).all()}

    subs_by_user: dict[int, list[UserSubscription]] = {}
    all_subs = db.query(UserSubscription).order_by(
        UserSubscription.created_at.desc(), UserSubscription.id.desc()
    ).all()
    for sub in all_subs:
        subs_by_user.setdefault(sub.user_id, []).append(sub)

    out = []
    for user in users:
        item = UserWithSubscriptionOut.model_validate(user)
        item.subscription = _current_subscription(subs_by_user.get(user.id, []), plans)
        out.append(item)
    return out


@router.post("", response_model=UserOut, status_code=201)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    existing = db.query(User).filter(User.email == payload.email).first()
    if existing:
        raise HTTPException(status_code=400, detail="Email already registered")

    user = User(
        full_name=payload.full_name.strip(),
        email=payload.email,
        username=payload.username.strip(),
        mobile_number=payload.mobile_number,
        device_id=payload.device_id,
        password_hash=hash_password(payload.password),
        status="active",
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # another request registered the same email in the meantime
        db.rollback()
        raise HTTPException(status_code=400, detail="Email already registered")
    db.refresh(user)
    logger.info("Created user %s", user.id)
    return user


def _set_status(db: Session, user_id: int, status: str) -> User:
    user = _get_user(db, user_id)
    user.status = status
    db.commit()
    db.refresh(user)
    logger.info("User %s is now %s", user_id, status)
    return user


@router.post("/{user_id}/deactivate", response_model=UserOut)
def deactivate_user(user_id: int, db: Session = Depends(get_db)):
    return _set_status(db, user_id, "inactive")


@router.post("/{user_id}/activate", response_model=UserOut)
def activate_user(user_id: int, db: Session = Depends(get_db)):
    return _set_status(db, user_id, "active")


# The user's app has to re-authenticate on its next launch
@router.post("/{user_id}/unlink-device", response_model=UserOut)
def unlink_device(user_id: int, db: Session = Depends(get_db)):
    user = _get_user(db, user_id)
    user.device_id = ""
    db.commit()
    db.refresh(user)
    logger.info("Unlinked device for user %s", user_id)
    return user


@router.get("/{user_id}/subscriptions", response_model=list[UserSubscriptionOut])
def user_subscriptions(user_id: int, db: Session = Depends(get_db)):
    _get_user(db, user_id)
    return (db.query(UserSubscription)
            .filter(UserSubscription.user_id == user_id)
            .order_by(UserSubscription.created_at.desc(), UserSubscription.id.desc())
            .all()
            )

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.session import get_db
from app.models.admin import Admin
from app.schemas.auth import RegisterIn, LoginIn, TokenOut, AdminOut
from app.core.security import hash_password, verify_password, create_access_token
from app.api.deps import get_current_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/register", response_model=AdminOut)
def register(payload: RegisterIn, db: Session = Depends(get_db)):
    if not settings.allow_admin_signup:
        raise HTTPException(status_code=403, detail="Admin sign up is disabled")

    existing = db.query(Admin).filter(Admin.email == payload.email).first()
    if existing:
        raise HTTPException(status_code=400, detail="Email already registered")

    admin = Admin(
        email=payload.email,
        password_hash=hash_password(payload.password),
    )

    db.add(admin)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Email already registered")
    db.refresh(admin)
    logger.info("Registered admin %s", admin.id)
    return admin


@router.post("/login", response_model=TokenOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    admin = db.query(Admin).filter(Admin.email == payload.email).first()
    if not admin or not verify_password(payload.password, admin.password_hash):
        logger.warning("Failed login for %s", payload.email)
        raise HTTPException(status_code=401, detail="Invalid email or password")

    token = create_access_token(subject=str(admin.id))
    return TokenOut(access_token=token)

@router.get("/me", response_model=AdminOut)
def me(current_admin: Admin = Depends(get_current_admin)):
    return current_admin

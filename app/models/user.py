from datetime import datetime
from sqlalchemy import String, Enum, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from app.db.base import Base
from app.utils.dt import utcnow

class User(Base):
    """An end user managed from the dashboard."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)

    full_name: Mapped[str] = mapped_column(String(120), index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    username: Mapped[str] = mapped_column(String(64))
    mobile_number: Mapped[str] = mapped_column(String(32), default="")

    # Device the user's app is bound to; empty when unlinked
    device_id: Mapped[str] = mapped_column(String(128), default="")

    password_hash: Mapped[str] = mapped_column(String(255))

    status: Mapped[str] = mapped_column(
        Enum("active", "inactive", name="user_status"),
        default="active",
        index=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)

    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

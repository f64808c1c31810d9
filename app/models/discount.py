from datetime import datetime
from decimal import Decimal
from sqlalchemy import String, Enum, Numeric, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from app.db.base import Base
from app.utils.dt import utcnow

class Discount(Base):
    __tablename__ = "discounts"

    id: Mapped[int] = mapped_column(primary_key=True)

    name: Mapped[str] = mapped_column(String(120))

    # 0 < percentage <= 100
    percentage: Mapped[Decimal] = mapped_column(Numeric(5, 2))

    description: Mapped[str] = mapped_column(String(500), default="")

    # Discounts are never deleted, only moved to inactive
    status: Mapped[str] = mapped_column(
        Enum("active", "inactive", name="discount_status"),
        default="active",
        index=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

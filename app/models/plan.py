from datetime import date, datetime
from decimal import Decimal
from sqlalchemy import ForeignKey, String, Enum, Integer, Numeric, JSON, Date, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.db.base import Base
from app.utils.dt import utcnow

class SubscriptionPlan(Base):
    __tablename__ = "subscription_plans"

    id: Mapped[int] = mapped_column(primary_key=True)

    # Display name, unique after trimming: "Basic", "Pro Quarterly"
    plan_name: Mapped[str] = mapped_column(String(120), unique=True, index=True)

    # Monthly price (use Numeric for currency)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2))

    # Ordered list of feature strings
    features: Mapped[list[str]] = mapped_column(JSON, default=list)

    # One of 1, 3, 6, 12
    duration_months: Mapped[int] = mapped_column(Integer, default=1)

    start_date: Mapped[date] = mapped_column(Date, default=date.today)

    status: Mapped[str] = mapped_column(
        Enum("active", "inactive", name="plan_status"),
        default="active",
        index=True
    )

    # Discount suggested when assigning this plan
    default_discount_id: Mapped[int | None] = mapped_column(ForeignKey("discounts.id"), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)

    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    default_discount = relationship("Discount")

    # Assignments keep plan_id after a delete, so ids must never be reused
    __table_args__ = {"sqlite_autoincrement": True}

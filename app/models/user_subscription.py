from datetime import datetime
from decimal import Decimal
from sqlalchemy import ForeignKey, Enum, DateTime, String, Integer, Numeric, Boolean, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.db.base import Base
from app.utils.dt import utcnow

class UserSubscription(Base):
    __tablename__ = "user_subscriptions"

    id: Mapped[int] = mapped_column(primary_key=True)

    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)

    # No FK: plans can be deleted while old assignments keep pointing at them
    plan_id: Mapped[int] = mapped_column(Integer, index=True)

    duration_months: Mapped[int] = mapped_column(Integer)

    # At most one active assignment per user
    status: Mapped[str] = mapped_column(
        Enum("active", "inactive", name="user_subscription_status"),
        default="active",
        index=True
    )

    # Discount applied at assignment time (saved or manual, never both)
    discount_id: Mapped[int | None] = mapped_column(ForeignKey("discounts.id"), nullable=True)
    discount_name: Mapped[str | None] = mapped_column(String(120), nullable=True)
    discount_percentage: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)
    discount_is_manual: Mapped[bool] = mapped_column(Boolean, default=False)

    # Quote stamped at assignment time
    original_price: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    final_price: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    total_discount: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    effective_discount_percentage: Mapped[Decimal] = mapped_column(Numeric(7, 4))

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    user = relationship("User")

    __table_args__ = (
        Index("ix_user_subscriptions_user_status", "user_id", "status"),
    )

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, field_validator, model_validator

from app.services.pricing import PriceQuote, validate_discount_percentage, validate_duration

class QuoteIn(BaseModel):
    plan_id: int
    duration_months: int = 1
    discount_id: int | None = None
    manual_discount_percentage: Decimal | None = None

    @field_validator("duration_months")
    @classmethod
    def duration_known(cls, v: int) -> int:
        return validate_duration(v)

    @field_validator("manual_discount_percentage")
    @classmethod
    def manual_in_range(cls, v: Decimal | None) -> Decimal | None:
        if v is None:
            return v
        return validate_discount_percentage(v)

    @model_validator(mode="after")
    def one_discount_source(self):
        if self.discount_id is not None and self.manual_discount_percentage is not None:
            raise ValueError("Choose either a saved discount or a manual percentage, not both")
        return self

class AssignIn(QuoteIn):
    user_id: int

class QuoteOut(BaseModel):
    plan_id: int
    duration_months: int
    tier_rate: float
    original_price: float
    duration_discount_amount: float
    manual_discount_amount: float
    total_discount: float
    final_price: float
    discount_percentage: float

    @classmethod
    def from_quote(cls, plan_id: int, duration_months: int, quote: PriceQuote) -> "QuoteOut":
        return cls(
            plan_id=plan_id,
            duration_months=duration_months,
            tier_rate=float(quote.tier_rate),
            original_price=round(float(quote.original_price), 2),
            duration_discount_amount=round(float(quote.duration_discount_amount), 2),
            manual_discount_amount=round(float(quote.manual_discount_amount), 2),
            total_discount=round(float(quote.total_discount), 2),
            final_price=round(float(quote.final_price), 2),
            discount_percentage=round(float(quote.discount_percentage), 2),
        )

class UserSubscriptionOut(BaseModel):
    id: int
    user_id: int
    plan_id: int
    duration_months: int
    status: str
    discount_id: int | None
    discount_name: str | None
    discount_percentage: float | None
    discount_is_manual: bool
    original_price: float
    final_price: float
    total_discount: float
    effective_discount_percentage: float
    created_at: datetime

    class Config:
        from_attributes = True

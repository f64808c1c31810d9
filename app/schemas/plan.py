from datetime import date, datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, field_validator

from app.services.pricing import validate_base_price, validate_duration
from app.utils.formatters import format_features

class PlanCreate(BaseModel):
    plan_name: str
    price: Decimal
    # Either a list or the comma-separated text the admin form sends
    features: list[str]
    duration_months: int = 1
    start_date: date | None = None
    status: Literal["active", "inactive"] = "active"
    default_discount_id: int | None = None

    @field_validator("plan_name")
    @classmethod
    def plan_name_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Plan name is required")
        return v

    @field_validator("price")
    @classmethod
    def price_positive(cls, v: Decimal) -> Decimal:
        return validate_base_price(v)

    @field_validator("features", mode="before")
    @classmethod
    def split_features(cls, v):
        if isinstance(v, str):
            return format_features(v)
        if isinstance(v, list):
            return [f.strip() for f in v if isinstance(f, str) and f.strip()]
        return v

    @field_validator("features")
    @classmethod
    def features_required(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("At least one feature is required")
        return v

    @field_validator("duration_months")
    @classmethod
    def duration_known(cls, v: int) -> int:
        return validate_duration(v)

class PlanOut(BaseModel):
    id: int
    plan_name: str
    price: float
    features: list[str]
    duration_months: int
    start_date: date
    status: str
    default_discount_id: int | None
    created_at: datetime

    class Config:
        from_attributes = True

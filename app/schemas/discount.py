from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, field_validator

from app.services.pricing import validate_discount_percentage

class DiscountCreate(BaseModel):
    name: str
    percentage: Decimal
    description: str = ""

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Discount name is required")
        return v

    @field_validator("percentage")
    @classmethod
    def percentage_in_range(cls, v: Decimal) -> Decimal:
        return validate_discount_percentage(v)

class DiscountOut(BaseModel):
    id: int
    name: str
    percentage: float
    description: str
    status: str
    created_at: datetime

    class Config:
        from_attributes = True

from datetime import date, datetime

from pydantic import BaseModel, EmailStr, Field

class UserCreate(BaseModel):
    full_name: str = Field(min_length=1)
    email: EmailStr
    username: str = Field(min_length=1)
    password: str = Field(min_length=6)
    mobile_number: str = ""
    device_id: str = ""

class UserOut(BaseModel):
    id: int
    full_name: str
    email: str
    username: str
    mobile_number: str
    device_id: str
    status: str
    created_at: datetime

    class Config:
        from_attributes = True

class CurrentSubscriptionOut(BaseModel):
    id: int
    plan_id: int
    plan_name: str
    price: float
    status: str
    start_date: date

class UserWithSubscriptionOut(UserOut):
    subscription: CurrentSubscriptionOut | None = None

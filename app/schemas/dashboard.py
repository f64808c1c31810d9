from datetime import datetime

from pydantic import BaseModel

class StatsOut(BaseModel):
    total_users: int
    active_users: int
    total_plans: int
    active_plans: int
    total_subscriptions: int
    active_subscriptions: int
    monthly_revenue: float
    annual_revenue: float
    last_update: datetime

class GrowthOut(BaseModel):
    labels: list[str]
    users: list[int]
    plans: list[int]

class PlanStatusOut(BaseModel):
    active: int
    inactive: int

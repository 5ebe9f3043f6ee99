from pydantic import BaseModel
from typing import List, Literal

BillingCycle = Literal["monthly", "yearly"]


class Plan(BaseModel):
    id: str
    name: str
    description: str
    monthly_price: int
    yearly_price: int
    features: List[str]
    cta: str
    popular: bool = False


class PricedPlan(Plan):
    billing_cycle: BillingCycle
    price: int
    discount_percentage: int

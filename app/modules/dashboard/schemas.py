# app/modules/dashboard/schemas.py
from datetime import datetime
from decimal import Decimal
from enum import Enum

from app.shared.schemas import ResponseModel

class ActivityType(str, Enum):
    sale = "sale"
    product = "product"
    customer = "customer"

class DashboardStatsResponse(ResponseModel):
    todays_sales: Decimal
    products_count: int
    customers_count: int
    orders_count: int

class ActivityResponse(ResponseModel):
    type: ActivityType
    id: str
    title: str
    description: str
    created_at: datetime

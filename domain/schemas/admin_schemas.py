from pydantic import BaseModel
from typing import List
from decimal import Decimal

from domain.schemas.order_schemas import OrderResponse


class DashboardStats(BaseModel):
    total_orders: int
    pending_orders: int
    completed_orders: int
    cancelled_orders: int
    total_users: int
    total_meals: int
    total_revenue: Decimal


class DashboardResponse(BaseModel):
    stats: DashboardStats
    recent_orders: List[OrderResponse]

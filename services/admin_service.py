from typing import List, Optional
from sqlalchemy.orm import Session
import logging

from app.config import settings
from domain.enums import OrderStatus
from domain.models import Order
from domain.schemas.admin_schemas import DashboardStats
from repositories import MealRepository, OrderRepository, ProfileRepository

logger = logging.getLogger("honestmeals.admin")


class AdminService:
    """Read models for the back-office dashboard"""

    @staticmethod
    def dashboard_stats(db: Session) -> DashboardStats:
        """
        Order counts by lifecycle, user and meal counts, and revenue.

        Revenue sums the totals of every order that was not cancelled.
        """
        orders = OrderRepository(db)
        stats = DashboardStats(
            total_orders=orders.count(),
            pending_orders=orders.count_by_status(OrderStatus.PENDING),
            completed_orders=orders.count_by_status(OrderStatus.DELIVERED),
            cancelled_orders=orders.count_by_status(OrderStatus.CANCELLED),
            total_users=ProfileRepository(db).count(),
            total_meals=MealRepository(db).count(),
            total_revenue=orders.revenue(),
        )
        logger.debug(
            f"dashboard_computed orders={stats.total_orders} revenue={stats.total_revenue}"
        )
        return stats

    @staticmethod
    def recent_orders(db: Session, limit: Optional[int] = None) -> List[Order]:
        return OrderRepository(db).recent(limit or settings.admin_recent_orders_limit)

"""
Order Repository - Data access layer for order operations
"""

from typing import List, Optional
from uuid import UUID
from decimal import Decimal
from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from repositories.base import BaseRepository
from domain.models import Order, OrderItem
from domain.enums import OrderStatus


def _with_details(query):
    return query.options(
        selectinload(Order.customer),
        selectinload(Order.guest_customer),
        selectinload(Order.items).selectinload(OrderItem.meal),
        selectinload(Order.items).selectinload(OrderItem.custom_meal),
    )


class OrderRepository(BaseRepository[Order]):
    """Repository for order data access"""

    def __init__(self, db: Session):
        super().__init__(db, Order)

    def get_detailed(self, order_id: UUID) -> Optional[Order]:
        return _with_details(self.db.query(Order)).filter(Order.id == order_id).first()

    def get_for_customer(self, order_id: UUID, customer_id: UUID) -> Optional[Order]:
        """Get order by ID for specific customer (authorization check)"""
        return (
            _with_details(self.db.query(Order))
            .filter(Order.id == order_id, Order.customer_id == customer_id)
            .first()
        )

    def list_by_customer(self, customer_id: UUID) -> List[Order]:
        return (
            _with_details(self.db.query(Order))
            .filter(Order.customer_id == customer_id)
            .order_by(Order.created_at.desc())
            .all()
        )

    def list_all(self, status: Optional[OrderStatus] = None) -> List[Order]:
        query = _with_details(self.db.query(Order))
        if status is not None:
            query = query.filter(Order.status == status)
        return query.order_by(Order.created_at.desc()).all()

    def recent(self, limit: int) -> List[Order]:
        return (
            _with_details(self.db.query(Order))
            .order_by(Order.created_at.desc())
            .limit(limit)
            .all()
        )

    def count_by_status(self, status: OrderStatus) -> int:
        return (
            self.db.query(func.count(Order.id)).filter(Order.status == status).scalar()
            or 0
        )

    def count_by_customer(self) -> dict:
        rows = (
            self.db.query(Order.customer_id, func.count(Order.id))
            .filter(Order.customer_id.isnot(None))
            .group_by(Order.customer_id)
            .all()
        )
        return {customer_id: count for customer_id, count in rows}

    def count_for_customer(self, customer_id: UUID) -> int:
        return (
            self.db.query(func.count(Order.id))
            .filter(Order.customer_id == customer_id)
            .scalar()
            or 0
        )

    def revenue(self) -> Decimal:
        """Sum of order totals, cancelled orders excluded"""
        total = (
            self.db.query(func.coalesce(func.sum(Order.total_amount), 0))
            .filter(Order.status != OrderStatus.CANCELLED)
            .scalar()
        )
        return Decimal(str(total or 0))


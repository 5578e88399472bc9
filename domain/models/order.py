"""
Order models.
"""

from sqlalchemy import (
    Column,
    Text,
    Boolean,
    Integer,
    Numeric,
    DateTime,
    ForeignKey,
    Uuid,
    CheckConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base
from domain.models.types import enum_column_type, utcnow
from domain.enums import OrderStatus, PaymentStatus


class Order(Base):
    """Customer order placed from the cart or the custom meal builder"""

    __tablename__ = "orders"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    customer_id = Column(Uuid, ForeignKey("profiles.id", ondelete="SET NULL"))
    guest_customer_id = Column(
        Uuid, ForeignKey("guest_customers.id", ondelete="SET NULL")
    )
    total_amount = Column(Numeric(10, 2), nullable=False)
    status = Column(
        enum_column_type(OrderStatus, "order_status"),
        nullable=False,
        default=OrderStatus.PENDING,
        index=True,
    )
    delivery_address = Column(Text, nullable=False)
    notes = Column(Text)
    admin_notes = Column(Text)
    payment_method = Column(Text, nullable=False)
    payment_status = Column(
        enum_column_type(PaymentStatus, "payment_status"),
        nullable=False,
        default=PaymentStatus.PENDING,
    )
    created_at = Column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), index=True
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
    )

    customer = relationship("Profile", back_populates="orders")
    guest_customer = relationship("GuestCustomer", back_populates="orders")
    items = relationship(
        "OrderItem", back_populates="order", cascade="all, delete-orphan"
    )

    __table_args__ = (
        CheckConstraint("total_amount >= 0", name="ck_order_total_nonneg"),
    )

    @property
    def customer_name(self):
        if self.customer is not None:
            return self.customer.full_name
        if self.guest_customer is not None:
            return self.guest_customer.full_name
        return None

    @property
    def customer_phone(self):
        if self.customer is not None:
            return self.customer.phone_number
        if self.guest_customer is not None:
            return self.guest_customer.phone_number
        return None


class OrderItem(Base):
    """Line of an order; references either a catalog meal or a custom meal"""

    __tablename__ = "order_items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    order_id = Column(
        Uuid, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False
    )
    meal_id = Column(Uuid, ForeignKey("meals.id", ondelete="SET NULL"))
    custom_meal_id = Column(Uuid, ForeignKey("custom_meals.id", ondelete="SET NULL"))
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)
    is_customized = Column(Boolean, nullable=False, default=False)

    order = relationship("Order", back_populates="items")
    meal = relationship("Meal")
    custom_meal = relationship("CustomMeal")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_order_item_qty_pos"),
    )

    @property
    def name(self):
        if self.meal is not None:
            return self.meal.name
        if self.custom_meal is not None:
            return self.custom_meal.name
        return None

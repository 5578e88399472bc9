from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session
import logging

from domain.enums import OrderStatus, PaymentStatus, PaymentMethod
from domain.models import Order, OrderItem, GuestCustomer
from domain.schemas.order_schemas import CustomerDetails, OrderCreate
from domain.schemas.profile_schemas import ProfileUpdateRequest
from repositories import OrderRepository
from services.cart_service import CartService
from services.profile_service import ProfileService
from services.whatsapp_service import WhatsAppService
from services.notification_service import (
    OrderEvent,
    ORDER_CREATED,
    ORDER_STATUS_CHANGED,
    order_events,
)
from app.exceptions import AppError, NotFoundError, ServiceValidationError

logger = logging.getLogger("honestmeals.orders")


@dataclass
class PlacedOrder:
    order: Order
    message: str
    whatsapp_url: str


def _matches(order: Order, query: str) -> bool:
    haystack = [
        str(order.id),
        order.customer_name or "",
        order.customer_phone or "",
        order.delivery_address or "",
    ]
    return any(query in value.lower() for value in haystack)


class OrderService:
    @staticmethod
    def persist_order(
        db: Session,
        customer: CustomerDetails,
        user_id: Optional[UUID],
        total_amount: Decimal,
        items: List[OrderItem],
        payment_method: PaymentMethod = PaymentMethod.COD,
        notes: Optional[str] = None,
    ) -> Order:
        """
        Store an order with its items in one transaction.

        Signed-in customers get their profile updated with the delivery
        details; guests get a guest customer record. If anything fails the
        whole unit is rolled back, so no order exists without its items.
        """
        try:
            customer_id = None
            guest_customer_id = None
            if user_id is not None:
                ProfileService.upsert_profile(
                    db,
                    user_id,
                    ProfileUpdateRequest(
                        full_name=customer.name,
                        phone_number=customer.phone,
                        address=customer.address,
                    ),
                    commit=False,
                )
                customer_id = user_id
            else:
                guest = GuestCustomer(
                    full_name=customer.name,
                    phone_number=customer.phone,
                    address=customer.address,
                )
                db.add(guest)
                db.flush()
                guest_customer_id = guest.id

            order = Order(
                customer_id=customer_id,
                guest_customer_id=guest_customer_id,
                total_amount=total_amount,
                status=OrderStatus.PENDING,
                delivery_address=customer.address,
                notes=notes or None,
                payment_method=payment_method.value,
                payment_status=PaymentStatus.PENDING,
            )
            order.items = items
            db.add(order)
            db.commit()
        except AppError:
            db.rollback()
            raise
        except Exception:
            db.rollback()
            logger.exception("Error creating order for user %s", user_id)
            raise

        logger.info(
            f"order_created order_id={order.id} customer_id={customer_id} "
            f"guest={guest_customer_id is not None} items={len(items)} total={total_amount}"
        )
        order = OrderRepository(db).get_detailed(order.id)
        order_events.publish(OrderEvent.from_order(ORDER_CREATED, order))
        return order

    @staticmethod
    def create_order(
        db: Session, data: OrderCreate, user_id: Optional[UUID] = None
    ) -> PlacedOrder:
        """
        Checkout: price the cart server-side, store the order and prepare the
        WhatsApp confirmation message.

        Raises:
            ServiceValidationError: empty cart or unavailable meal
            NotFoundError: unknown meal in the cart
        """
        cart = CartService.build_cart(db, data.items)
        items = [
            OrderItem(
                meal_id=line.meal_id,
                quantity=line.quantity,
                unit_price=line.price,
                total_price=line.line_total,
                is_customized=False,
            )
            for line in cart.lines
        ]
        order = OrderService.persist_order(
            db,
            data.customer,
            user_id,
            cart.total,
            items,
            payment_method=data.payment_method,
            notes=data.note,
        )

        message = WhatsAppService.build_order_message(
            name=data.customer.name,
            phone=data.customer.phone,
            address=data.customer.address,
            lines=cart.lines,
            subtotal=cart.subtotal,
            delivery_fee=cart.delivery_fee,
            total=cart.total,
            note=data.note,
        )
        return PlacedOrder(
            order=order, message=message, whatsapp_url=WhatsAppService.order_link(message)
        )

    @staticmethod
    def list_for_user(db: Session, user_id: UUID) -> List[Order]:
        return OrderRepository(db).list_by_customer(user_id)

    @staticmethod
    def get_order(db: Session, order_id: UUID, user_id: Optional[UUID] = None) -> Order:
        """Fetch an order; when user_id is given it must be the owner."""
        repo = OrderRepository(db)
        if user_id is None:
            order = repo.get_detailed(order_id)
        else:
            order = repo.get_for_customer(order_id, user_id)
        if not order:
            raise NotFoundError(f"Order {order_id} not found")
        return order

    @staticmethod
    def list_orders(
        db: Session, search: Optional[str] = None, status: Optional[OrderStatus] = None
    ) -> List[Order]:
        """
        Admin listing, newest first.

        ``search`` matches order id, customer name, phone or delivery address,
        case-insensitively.
        """
        orders = OrderRepository(db).list_all(status)
        if search and search.strip():
            query = search.strip().lower()
            orders = [o for o in orders if _matches(o, query)]
        return orders

    @staticmethod
    def update_status(
        db: Session, order_id: UUID, status: OrderStatus, note: Optional[str] = None
    ) -> Order:
        repo = OrderRepository(db)
        order = repo.get_detailed(order_id)
        if not order:
            raise NotFoundError(f"Order {order_id} not found")

        previous = order.status
        order.status = status
        order.admin_notes = note or None
        order = repo.update(order)

        logger.info(
            f"order_status_changed order_id={order_id} from={previous.value} to={status.value}"
        )
        order_events.publish(OrderEvent.from_order(ORDER_STATUS_CHANGED, order))
        return order

    @staticmethod
    def cancel_order(db: Session, order_id: UUID, user_id: UUID) -> Order:
        """Customers may cancel their own orders while still pending."""
        order = OrderService.get_order(db, order_id, user_id)
        if order.status != OrderStatus.PENDING:
            raise ServiceValidationError(
                "Only pending orders can be cancelled",
                details={"status": order.status.value},
            )
        order.status = OrderStatus.CANCELLED
        order = OrderRepository(db).update(order)
        logger.info(f"order_cancelled order_id={order_id} user_id={user_id}")
        order_events.publish(OrderEvent.from_order(ORDER_STATUS_CHANGED, order))
        return order
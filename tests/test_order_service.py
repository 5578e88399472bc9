"""
Checkout and order lifecycle tests against the SQLite test database.

Covers:
- server-side cart pricing and its failure modes
- guest and signed-in checkout, with the WhatsApp hand-off
- customer order visibility and cancellation
- admin search and status changes, with order events
"""

import uuid
from decimal import Decimal

import pytest
from sqlalchemy.orm import Session

from app.exceptions import NotFoundError, ServiceValidationError
from domain.enums import OrderStatus, PaymentMethod
from domain.models import GuestCustomer, Order, OrderItem, Profile
from domain.schemas.cart_schemas import CartItemInput
from domain.schemas.order_schemas import CustomerDetails, OrderCreate
from services import notification_service
from services.cart_service import CartService
from services.order_service import OrderService
from test_fixtures import create_category, create_meal, create_profile, db_session


@pytest.fixture
def meals(db_session: Session):
    bowls = create_category(db_session)
    return {
        "paneer": create_meal(db_session, bowls, "Grilled Paneer Bowl", price="249"),
        "wrap": create_meal(
            db_session, bowls, "Chicken Wrap", price="199", calories=450, protein="28"
        ),
        "sold_out": create_meal(
            db_session, bowls, "Chicken Biryani", price="299", is_available=False
        ),
    }


@pytest.fixture
def published(monkeypatch):
    """Capture events handed to the process-wide bus"""
    events = []
    monkeypatch.setattr(
        notification_service.order_events,
        "publish",
        lambda event: events.append(event) or 0,
    )
    return events


def _customer(name="Priya Sharma"):
    return CustomerDetails(name=name, phone="9876543210", address="12 MG Road, Pune")


def _checkout(meals, note=None):
    return OrderCreate(
        customer=_customer(),
        items=[
            CartItemInput(meal_id=meals["paneer"].id, quantity=2),
            CartItemInput(meal_id=meals["wrap"].id, quantity=1),
        ],
        note=note,
    )


# =============================================================================
# CART QUOTE
# =============================================================================


def test_quote_uses_server_prices_and_merges_duplicates(db_session: Session, meals):
    quote = CartService.quote(
        db_session,
        [
            CartItemInput(meal_id=meals["paneer"].id, quantity=1),
            CartItemInput(meal_id=meals["wrap"].id, quantity=1),
            CartItemInput(meal_id=meals["paneer"].id, quantity=1),
        ],
    )

    assert len(quote.lines) == 2
    assert quote.lines[0].quantity == 2
    assert quote.item_count == 3
    assert quote.subtotal == Decimal("697")
    assert quote.delivery_fee == Decimal("40")
    assert quote.total == Decimal("737")
    assert quote.total_calories == 520 * 2 + 450


def test_quote_failure_modes(db_session: Session, meals):
    with pytest.raises(ServiceValidationError) as exc:
        CartService.quote(db_session, [])
    assert exc.value.message == "Your cart is empty"

    with pytest.raises(NotFoundError):
        CartService.quote(db_session, [CartItemInput(meal_id=uuid.uuid4(), quantity=1)])

    with pytest.raises(ServiceValidationError) as exc:
        CartService.quote(
            db_session, [CartItemInput(meal_id=meals["sold_out"].id, quantity=1)]
        )
    assert "unavailable" in exc.value.message


# =============================================================================
# CHECKOUT
# =============================================================================


def test_guest_checkout(db_session: Session, meals, published):
    """
    Verifies:
    - a guest customer row holds the contact details
    - the total includes the delivery fee
    - items carry server prices
    - the WhatsApp link carries the encoded summary
    - an order_created event is published
    """
    placed = OrderService.create_order(db_session, _checkout(meals, note="No onions"))
    order = placed.order

    assert order.customer_id is None
    assert order.guest_customer_id is not None
    assert order.customer_name == "Priya Sharma"
    assert order.status == OrderStatus.PENDING
    assert Decimal(order.total_amount) == Decimal("737")
    assert order.payment_method == PaymentMethod.COD.value
    assert order.notes == "No onions"
    assert sorted((i.name, i.quantity) for i in order.items) == [
        ("Chicken Wrap", 1),
        ("Grilled Paneer Bowl", 2),
    ]

    assert "1. Grilled Paneer Bowl x 2 - ₹498.00" in placed.message
    assert placed.whatsapp_url.startswith("https://wa.me/918888756746?text=")
    assert db_session.query(GuestCustomer).count() == 1

    assert [e.type for e in published] == ["order_created"]
    assert published[0].order_id == str(order.id)


def test_signed_in_checkout_upserts_profile(db_session: Session, meals, published):
    user_id = uuid.uuid4()

    placed = OrderService.create_order(db_session, _checkout(meals), user_id=user_id)

    profile = db_session.get(Profile, user_id)
    assert profile is not None
    assert profile.full_name == "Priya Sharma"
    assert profile.address == "12 MG Road, Pune"
    assert placed.order.customer_id == user_id
    assert db_session.query(GuestCustomer).count() == 0


def test_failed_checkout_leaves_no_order(db_session: Session, meals, published):
    data = OrderCreate(
        customer=_customer(),
        items=[
            CartItemInput(meal_id=meals["paneer"].id, quantity=1),
            CartItemInput(meal_id=meals["sold_out"].id, quantity=1),
        ],
    )
    with pytest.raises(ServiceValidationError):
        OrderService.create_order(db_session, data)

    assert db_session.query(Order).count() == 0
    assert db_session.query(OrderItem).count() == 0
    assert published == []


# =============================================================================
# CUSTOMER ORDERS
# =============================================================================


def test_customers_only_see_their_orders(db_session: Session, meals, published):
    owner = create_profile(db_session)
    other = create_profile(db_session, full_name="Arjun Mehta")
    first = OrderService.create_order(db_session, _checkout(meals), owner.id).order
    second = OrderService.create_order(db_session, _checkout(meals), owner.id).order

    mine = OrderService.list_for_user(db_session, owner.id)
    assert [o.id for o in mine] == [second.id, first.id]
    assert OrderService.list_for_user(db_session, other.id) == []

    assert OrderService.get_order(db_session, first.id, owner.id).id == first.id
    with pytest.raises(NotFoundError):
        OrderService.get_order(db_session, first.id, other.id)


def test_cancel_only_while_pending(db_session: Session, meals, published):
    owner = create_profile(db_session)
    order = OrderService.create_order(db_session, _checkout(meals), owner.id).order

    cancelled = OrderService.cancel_order(db_session, order.id, owner.id)
    assert cancelled.status == OrderStatus.CANCELLED

    with pytest.raises(ServiceValidationError) as exc:
        OrderService.cancel_order(db_session, order.id, owner.id)
    assert exc.value.message == "Only pending orders can be cancelled"
    assert published[-1].type == "order_status_changed"


# =============================================================================
# ADMIN
# =============================================================================


def test_admin_search_and_status_filter(db_session: Session, meals, published):
    OrderService.create_order(db_session, _checkout(meals))
    rahul = OrderService.create_order(
        db_session,
        OrderCreate(
            customer=CustomerDetails(
                name="Rahul Verma", phone="9000011111", address="Baner, Pune"
            ),
            items=[CartItemInput(meal_id=meals["wrap"].id, quantity=1)],
        ),
    ).order

    assert len(OrderService.list_orders(db_session)) == 2
    assert [o.id for o in OrderService.list_orders(db_session, "rahul")] == [rahul.id]
    assert [o.id for o in OrderService.list_orders(db_session, "90000")] == [rahul.id]
    assert [o.id for o in OrderService.list_orders(db_session, "BANER")] == [rahul.id]
    assert [
        o.id for o in OrderService.list_orders(db_session, str(rahul.id)[:8])
    ] == [rahul.id]

    OrderService.update_status(db_session, rahul.id, OrderStatus.APPROVED)
    approved = OrderService.list_orders(db_session, status=OrderStatus.APPROVED)
    assert [o.id for o in approved] == [rahul.id]


def test_update_status_sets_admin_notes(db_session: Session, meals, published):
    order = OrderService.create_order(db_session, _checkout(meals)).order

    updated = OrderService.update_status(
        db_session, order.id, OrderStatus.PREPARING, "Kitchen started"
    )
    assert updated.status == OrderStatus.PREPARING
    assert updated.admin_notes == "Kitchen started"

    updated = OrderService.update_status(db_session, order.id, OrderStatus.OUT_FOR_DELIVERY)
    assert updated.admin_notes is None
    assert [e.status for e in published[1:]] == ["preparing", "out_for_delivery"]

    with pytest.raises(NotFoundError):
        OrderService.update_status(db_session, uuid.uuid4(), OrderStatus.DELIVERED)

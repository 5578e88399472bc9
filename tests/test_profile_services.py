"""
Profile, favorites and dashboard service tests with real database sessions.
"""

import uuid
from decimal import Decimal

import pytest
from sqlalchemy.orm import Session

from app.exceptions import ConflictError, NotFoundError
from domain.enums import OrderStatus, UserRole
from domain.schemas.cart_schemas import CartItemInput
from domain.schemas.order_schemas import CustomerDetails, OrderCreate
from domain.schemas.profile_schemas import ProfileUpdateRequest
from services import notification_service
from services.admin_service import AdminService
from services.favorite_service import FavoriteService
from services.order_service import OrderService
from services.profile_service import ProfileService
from test_fixtures import (
    create_category,
    create_meal,
    create_profile,
    db_session,
    unique_email,
)


@pytest.fixture(autouse=True)
def quiet_bus(monkeypatch):
    monkeypatch.setattr(notification_service.order_events, "publish", lambda event: 0)


# =============================================================================
# PROFILE SERVICE
# =============================================================================


def test_upsert_creates_then_updates(db_session: Session):
    """
    Verifies:
    - first upsert creates a customer profile and reports created=True
    - later upserts only touch the fields that were sent
    """
    user_id = uuid.uuid4()
    email = unique_email("priya")

    profile, created = ProfileService.upsert_profile(
        db_session, user_id, ProfileUpdateRequest(full_name="Priya Sharma", email=email)
    )
    assert created is True
    assert profile.role == UserRole.CUSTOMER

    profile, created = ProfileService.upsert_profile(
        db_session, user_id, ProfileUpdateRequest(phone_number="9876543210")
    )
    assert created is False
    assert profile.full_name == "Priya Sharma"
    assert profile.email == email
    assert profile.phone_number == "9876543210"


def test_upsert_rejects_taken_email(db_session: Session):
    taken = create_profile(db_session)
    with pytest.raises(ConflictError):
        ProfileService.upsert_profile(
            db_session, uuid.uuid4(), ProfileUpdateRequest(email=taken.email)
        )


def test_get_profile_missing_returns_none(db_session: Session):
    assert ProfileService.get_profile(db_session, uuid.uuid4()) is None


def test_set_role(db_session: Session):
    profile = create_profile(db_session)
    assert ProfileService.set_role(db_session, profile.id, UserRole.ADMIN).is_admin
    with pytest.raises(NotFoundError):
        ProfileService.set_role(db_session, uuid.uuid4(), UserRole.ADMIN)


# =============================================================================
# FAVORITES
# =============================================================================


def test_favorites_add_remove_toggle(db_session: Session):
    user = create_profile(db_session)
    bowls = create_category(db_session)
    paneer = create_meal(db_session, bowls, "Grilled Paneer Bowl")
    wrap = create_meal(db_session, bowls, "Chicken Wrap")

    assert FavoriteService.add(db_session, user.id, paneer.id) is True
    assert FavoriteService.add(db_session, user.id, paneer.id) is False
    assert FavoriteService.toggle(db_session, user.id, wrap.id) is True

    assert set(FavoriteService.list_meal_ids(db_session, user.id)) == {paneer.id, wrap.id}
    assert [m.name for m in FavoriteService.list_meals(db_session, user.id)] == [
        "Chicken Wrap",
        "Grilled Paneer Bowl",
    ]

    assert FavoriteService.toggle(db_session, user.id, paneer.id) is False
    assert FavoriteService.remove(db_session, user.id, paneer.id) is False
    assert FavoriteService.list_meal_ids(db_session, user.id) == [wrap.id]


def test_favorite_unknown_meal(db_session: Session):
    user = create_profile(db_session)
    with pytest.raises(NotFoundError):
        FavoriteService.add(db_session, user.id, uuid.uuid4())


# =============================================================================
# DASHBOARD
# =============================================================================


def _order(db, meal, name):
    return OrderService.create_order(
        db,
        OrderCreate(
            customer=CustomerDetails(name=name, phone="9000000000", address="Pune"),
            items=[CartItemInput(meal_id=meal.id, quantity=1)],
        ),
    ).order


def test_dashboard_stats_and_recent_orders(db_session: Session):
    """
    Verifies:
    - order counts per lifecycle bucket
    - revenue leaves out cancelled orders
    - recent orders are newest first and limited
    """
    create_profile(db_session)
    create_profile(db_session, role=UserRole.ADMIN, full_name="Kitchen Admin")
    bowls = create_category(db_session)
    paneer = create_meal(db_session, bowls, price="249")

    orders = [_order(db_session, paneer, f"Guest {i}") for i in range(7)]
    OrderService.update_status(db_session, orders[0].id, OrderStatus.DELIVERED)
    OrderService.update_status(db_session, orders[1].id, OrderStatus.CANCELLED)

    stats = AdminService.dashboard_stats(db_session)
    assert stats.total_orders == 7
    assert stats.pending_orders == 5
    assert stats.completed_orders == 1
    assert stats.cancelled_orders == 1
    assert stats.total_users == 2
    assert stats.total_meals == 1
    assert stats.total_revenue == Decimal("289") * 6

    recent = AdminService.recent_orders(db_session)
    assert [o.id for o in recent] == [o.id for o in reversed(orders)][:5]
    assert recent[0].customer_name == "Guest 6"
    assert len(AdminService.recent_orders(db_session, 2)) == 2


def test_list_users_with_order_counts(db_session: Session):
    buyer = create_profile(db_session)
    idle = create_profile(db_session, full_name="Arjun Mehta")
    bowls = create_category(db_session)
    paneer = create_meal(db_session, bowls)
    for _ in range(2):
        OrderService.create_order(
            db_session,
            OrderCreate(
                customer=CustomerDetails(name="Priya", phone="1", address="Pune"),
                items=[CartItemInput(meal_id=paneer.id, quantity=1)],
            ),
            user_id=buyer.id,
        )

    counts = {p.id: n for p, n in ProfileService.list_users(db_session)}
    assert counts == {buyer.id: 2, idle.id: 0}

"""
Shared test fixtures and utilities for the Honest Meals test suite.

This module contains factory helpers that mimic ORM rows, the test client,
and a database session fixture backed by the in-memory SQLite engine.
"""

import uuid
from types import SimpleNamespace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from domain.enums import (
    CustomMealStatus,
    OrderStatus,
    PaymentStatus,
    UserRole,
)
from domain.models import (
    Base,
    DietaryType,
    Ingredient,
    Meal,
    MealCategory,
    Profile,
    SessionLocal,
    engine,
)
from main import app

# TestClient without a context manager does not run the lifespan; tests that
# need tables use the db_session fixture below.
client = TestClient(app)


def unique_email(prefix: str = "test") -> str:
    """Generate unique email address using UUID to avoid conflicts"""
    return f"{prefix}-{uuid.uuid4()}@example.com"


def user_headers(user_id) -> dict:
    return {"X-User-Id": str(user_id)}


def _now():
    return datetime.now(timezone.utc)


# =============================================================================
# ROW FACTORIES (SimpleNamespace mimics ORM rows read by routes)
# =============================================================================


def make_meal(
    meal_id=None,
    name="Grilled Paneer Bowl",
    price=Decimal("249"),
    calories=520,
    protein=Decimal("32.5"),
    is_available=True,
    food_type=True,
    category_id=None,
):
    """
    Create a mock catalog meal.

    Example:
        >>> meal = make_meal(name="Chicken Wrap", food_type=False)
        >>> meal.price
        Decimal('249')
    """
    now = _now()
    return SimpleNamespace(
        id=meal_id or uuid.uuid4(),
        name=name,
        description="Protein-rich bowl with brown rice",
        price=price,
        calories=calories,
        protein=protein,
        carbs=Decimal("48.0"),
        fat=Decimal("14.2"),
        fiber=Decimal("6.0"),
        image_url=None,
        category_id=category_id or uuid.uuid4(),
        dietary_type_id=None,
        food_type=food_type,
        is_available=is_available,
        spice_level=2,
        cooking_time_minutes=20,
        created_at=now,
        updated_at=now,
        category=None,
        dietary_type=None,
        ingredients=[],
    )


def make_profile(user_id=None, role=UserRole.CUSTOMER, full_name="Priya Sharma"):
    now = _now()
    return SimpleNamespace(
        id=user_id or uuid.uuid4(),
        full_name=full_name,
        email=unique_email("priya"),
        phone_number="9876543210",
        address="12 MG Road, Pune",
        role=role,
        is_admin=role == UserRole.ADMIN,
        created_at=now,
        updated_at=now,
    )


def make_order_item(name="Grilled Paneer Bowl", quantity=2, unit_price=Decimal("249")):
    return SimpleNamespace(
        id=uuid.uuid4(),
        meal_id=uuid.uuid4(),
        custom_meal_id=None,
        name=name,
        quantity=quantity,
        unit_price=unit_price,
        total_price=unit_price * quantity,
        is_customized=False,
    )


def make_order(
    order_id=None,
    customer_id=None,
    status=OrderStatus.PENDING,
    items=None,
    total_amount=None,
):
    """
    Create a mock order with one line by default.

    The total includes the 40 delivery fee like a real checkout.
    """
    items = items if items is not None else [make_order_item()]
    if total_amount is None:
        total_amount = sum((i.total_price for i in items), Decimal("0")) + Decimal("40")
    now = _now()
    return SimpleNamespace(
        id=order_id or uuid.uuid4(),
        customer_id=customer_id,
        guest_customer_id=None if customer_id else uuid.uuid4(),
        customer_name="Priya Sharma",
        customer_phone="9876543210",
        total_amount=total_amount,
        status=status,
        delivery_address="12 MG Road, Pune",
        notes=None,
        admin_notes=None,
        payment_method="COD",
        payment_status=PaymentStatus.PENDING,
        created_at=now,
        updated_at=now,
        items=items,
    )


def make_custom_meal(customer_id=None, name="Post-Workout Bowl"):
    return SimpleNamespace(
        id=uuid.uuid4(),
        customer_id=customer_id or uuid.uuid4(),
        name=name,
        description=None,
        dietary_type_id=None,
        instructions="Less oil please",
        status=CustomMealStatus.PENDING,
        created_at=_now(),
        base_price=Decimal("49"),
        total_price=Decimal("56"),
        calories=Decimal("165.00"),
        protein=Decimal("31.00"),
        carbs=Decimal("0.00"),
        fat=Decimal("3.60"),
        components=[],
    )


# =============================================================================
# DATABASE SESSION FIXTURE FOR INTEGRATION TESTS
# =============================================================================


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """
    Fresh schema per test on the shared in-memory SQLite engine.

    The engine uses a static pool, so routes called through ``client`` see
    the same tables and rows as the session yielded here.
    """
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        Base.metadata.drop_all(bind=engine)


# =============================================================================
# PERSISTED ROW HELPERS
# =============================================================================


def create_profile(db: Session, role=UserRole.CUSTOMER, full_name="Priya Sharma"):
    profile = Profile(
        full_name=full_name,
        email=unique_email(full_name.split()[0].lower()),
        phone_number="9876543210",
        address="12 MG Road, Pune",
        role=role,
    )
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


def create_category(db: Session, name="Bowls", display_order=0):
    category = MealCategory(name=name, display_order=display_order)
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def create_dietary_type(db: Session, name="soups"):
    dietary_type = DietaryType(name=name)
    db.add(dietary_type)
    db.commit()
    db.refresh(dietary_type)
    return dietary_type


def create_meal(
    db: Session,
    category,
    name="Grilled Paneer Bowl",
    price="249",
    calories=520,
    protein="32.5",
    is_available=True,
    food_type=True,
    description=None,
    dietary_type=None,
):
    meal = Meal(
        name=name,
        description=description,
        price=Decimal(price),
        calories=calories,
        protein=Decimal(protein),
        carbs=Decimal("40"),
        fat=Decimal("12"),
        category_id=category.id,
        dietary_type_id=dietary_type.id if dietary_type else None,
        food_type=food_type,
        is_available=is_available,
    )
    db.add(meal)
    db.commit()
    db.refresh(meal)
    return meal


def create_ingredient(
    db: Session,
    name="Chicken Breast",
    calories="165",
    protein="31",
    carbs="0",
    fat="3.6",
    price="30",
    is_allergen=False,
):
    ingredient = Ingredient(
        name=name,
        calories_per_100g=Decimal(calories),
        protein_per_100g=Decimal(protein),
        carbs_per_100g=Decimal(carbs),
        fat_per_100g=Decimal(fat),
        price_per_100g=Decimal(price),
        is_allergen=is_allergen,
    )
    db.add(ingredient)
    db.commit()
    db.refresh(ingredient)
    return ingredient

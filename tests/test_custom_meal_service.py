"""
Custom meal builder tests: pricing, saving and ordering.

Reference numbers (base price 49, catalog ingredients priced 5 per 100 kcal):
- 100 g chicken breast (165 kcal) contributes round(8.25) = 8
- 150 g of a custom ingredient at 10 per 100 g contributes 15.00
"""

import uuid
from decimal import Decimal

import pytest
from sqlalchemy.orm import Session

from app.exceptions import NotFoundError, ServiceValidationError
from domain.enums import CustomMealStatus, PaymentMethod
from domain.models import Order
from domain.schemas.custom_meal_schemas import (
    CustomMealComponentInput,
    CustomMealCreate,
)
from domain.schemas.ingredient_schemas import CustomIngredientCreate
from domain.schemas.order_schemas import CustomerDetails
from services import notification_service
from services.custom_meal_service import CustomMealService
from services.ingredient_service import IngredientService
from test_fixtures import create_ingredient, create_profile, db_session


@pytest.fixture(autouse=True)
def quiet_bus(monkeypatch):
    monkeypatch.setattr(notification_service.order_events, "publish", lambda event: 0)


@pytest.fixture
def kitchen(db_session: Session):
    owner = create_profile(db_session)
    chicken = create_ingredient(db_session)
    chutney = IngredientService.create_custom(
        db_session, owner.id, CustomIngredientCreate(name="Mom's Chutney")
    )
    return {"owner": owner, "chicken": chicken, "chutney": chutney}


def _components(kitchen):
    return [
        CustomMealComponentInput(
            ingredient_id=kitchen["chicken"].id, quantity_grams=Decimal("100")
        ),
        CustomMealComponentInput(
            custom_ingredient_id=kitchen["chutney"].id, quantity_grams=Decimal("150")
        ),
    ]


def test_preview_prices_components(db_session: Session, kitchen):
    preview = CustomMealService.preview(db_session, kitchen["owner"].id, _components(kitchen))

    assert preview.base_price == Decimal("49")
    assert preview.total_price == Decimal("72.00")
    assert preview.calories == Decimal("315")
    assert preview.protein == Decimal("38.50")
    assert [c.price_contribution for c in preview.components] == [
        Decimal("8"),
        Decimal("15.00"),
    ]
    assert [c.is_custom for c in preview.components] == [False, True]


def test_preview_uses_default_portion(db_session: Session, kitchen):
    preview = CustomMealService.preview(
        db_session, None, [CustomMealComponentInput(ingredient_id=kitchen["chicken"].id)]
    )
    assert preview.components[0].quantity_grams == Decimal("50")
    # 82.5 kcal -> 4.125 -> 4
    assert preview.total_price == Decimal("53.00")


def test_custom_ingredients_need_their_owner(db_session: Session, kitchen):
    stranger = create_profile(db_session, full_name="Arjun Mehta")
    chutney = CustomMealComponentInput(custom_ingredient_id=kitchen["chutney"].id)

    with pytest.raises(ServiceValidationError):
        CustomMealService.preview(db_session, None, [chutney])
    with pytest.raises(NotFoundError):
        CustomMealService.preview(db_session, stranger.id, [chutney])
    with pytest.raises(NotFoundError):
        CustomMealService.preview(
            db_session, None, [CustomMealComponentInput(ingredient_id=uuid.uuid4())]
        )


def test_save_list_get_delete(db_session: Session, kitchen):
    """
    Verifies:
    - saved meals are pending review and keep their computed totals
    - components keep their price contribution
    - meals are visible only to their owner
    """
    owner = kitchen["owner"]
    meal = CustomMealService.save(
        db_session,
        owner.id,
        CustomMealCreate(
            name="Post-Workout Bowl",
            components=_components(kitchen),
            instructions="Less oil please",
        ),
    )

    assert meal.status == CustomMealStatus.PENDING
    assert Decimal(meal.total_price) == Decimal("72.00")
    assert Decimal(meal.calories) == Decimal("315")
    assert sorted(Decimal(c.price_contribution) for c in meal.components) == [
        Decimal("8.00"),
        Decimal("15.00"),
    ]

    assert [m.id for m in CustomMealService.list_for_user(db_session, owner.id)] == [
        meal.id
    ]
    stranger = create_profile(db_session, full_name="Arjun Mehta")
    with pytest.raises(NotFoundError):
        CustomMealService.get(db_session, stranger.id, meal.id)

    assert CustomMealService.delete(db_session, stranger.id, meal.id) is False
    assert CustomMealService.delete(db_session, owner.id, meal.id) is True
    assert CustomMealService.list_for_user(db_session, owner.id) == []


def test_save_requires_components_and_name(db_session: Session, kitchen):
    owner_id = kitchen["owner"].id
    with pytest.raises(ServiceValidationError):
        CustomMealService.save(db_session, owner_id, CustomMealCreate(components=[]))
    with pytest.raises(ServiceValidationError):
        CustomMealService.save(
            db_session, owner_id, CustomMealCreate(name="   ", components=_components(kitchen))
        )
    with pytest.raises(NotFoundError):
        CustomMealService.save(
            db_session, uuid.uuid4(), CustomMealCreate(components=_components(kitchen))
        )


def test_place_order_for_custom_meal(db_session: Session, kitchen):
    """
    Verifies:
    - total is the meal price plus the delivery fee
    - payment is cash on delivery with a "Custom meal: <name>" note
    - one customised order item references the custom meal
    - the WhatsApp message lists the components
    """
    owner = kitchen["owner"]
    meal = CustomMealService.save(
        db_session,
        owner.id,
        CustomMealCreate(name="Post-Workout Bowl", components=_components(kitchen)),
    )

    placed = CustomMealService.place_order(
        db_session,
        owner.id,
        meal.id,
        CustomerDetails(name="Priya Sharma", phone="9876543210", address="12 MG Road"),
    )
    order = placed.order

    assert Decimal(order.total_amount) == Decimal("112.00")
    assert order.payment_method == PaymentMethod.COD.value
    assert order.notes == "Custom meal: Post-Workout Bowl"
    assert len(order.items) == 1
    item = order.items[0]
    assert item.custom_meal_id == meal.id
    assert item.is_customized is True
    assert item.quantity == 1
    assert item.name == "Post-Workout Bowl"

    assert placed.message.startswith("*New Custom Meal Order from Honest Meals*")
    assert "1. Chicken Breast - 100g\n" in placed.message
    assert "2. Mom's Chutney - 150g (Custom)\n" in placed.message
    assert "*Grand Total:* ₹112.00" in placed.message
    assert db_session.query(Order).count() == 1

from dataclasses import dataclass
from typing import List
from uuid import UUID
from sqlalchemy.orm import Session
import logging

from app.config import settings
from domain.enums import CustomMealStatus, PaymentMethod
from domain.models import CustomMeal, CustomMealComponent, OrderItem
from domain.nutrition import (
    CustomMealTotals,
    PricedComponent,
    portion_nutrition,
    price_contribution,
    round_to,
    to_decimal,
    TWO_DECIMALS,
)
from domain.mappers import CustomMealMapper
from domain.schemas.custom_meal_schemas import (
    CustomMealComponentInput,
    CustomMealCreate,
)
from domain.schemas.order_schemas import CustomerDetails
from repositories import (
    CustomMealRepository,
    CustomIngredientRepository,
    DietaryTypeRepository,
    IngredientRepository,
    ProfileRepository,
)
from services.order_service import OrderService, PlacedOrder
from services.whatsapp_service import WhatsAppService
from app.exceptions import NotFoundError, ServiceValidationError

logger = logging.getLogger("honestmeals.custom_meals")


@dataclass
class _Source:
    """Resolved ingredient row for a requested component"""

    row: object
    is_custom: bool


class CustomMealService:
    """Custom meal builder: pricing, saving and ordering customer-built meals"""

    @staticmethod
    def _resolve_sources(
        db: Session, user_id, components: List[CustomMealComponentInput]
    ) -> List[_Source]:
        """
        Load the ingredient row behind every component.

        Custom ingredients are only visible to the customer who created them;
        guests (user_id None) can only use catalog ingredients.
        """
        catalog_ids = [c.ingredient_id for c in components if c.ingredient_id]
        custom_ids = [c.custom_ingredient_id for c in components if c.custom_ingredient_id]

        catalog = {i.id: i for i in IngredientRepository(db).get_many(catalog_ids)}
        custom = {}
        if custom_ids:
            if user_id is None:
                raise ServiceValidationError(
                    "Please sign in to use your custom ingredients"
                )
            custom = {
                i.id: i
                for i in CustomIngredientRepository(db).get_many_owned(custom_ids, user_id)
            }

        sources = []
        for comp in components:
            if comp.ingredient_id:
                row = catalog.get(comp.ingredient_id)
                if row is None:
                    raise NotFoundError(f"Ingredient {comp.ingredient_id} not found")
                sources.append(_Source(row=row, is_custom=False))
            else:
                row = custom.get(comp.custom_ingredient_id)
                if row is None:
                    raise NotFoundError(
                        f"Custom ingredient {comp.custom_ingredient_id} not found"
                    )
                sources.append(_Source(row=row, is_custom=True))
        return sources

    @staticmethod
    def price_components(
        db: Session, user_id, components: List[CustomMealComponentInput]
    ) -> CustomMealTotals:
        """
        Compute per-component nutrition and price plus meal totals.

        Components without a quantity use the builder's default portion.
        """
        sources = CustomMealService._resolve_sources(db, user_id, components)
        totals = CustomMealTotals(base_price=settings.custom_meal_base_price)
        for comp, source in zip(components, sources):
            grams = to_decimal(
                comp.quantity_grams or settings.custom_ingredient_default_grams
            )
            totals.components.append(
                PricedComponent(
                    name=source.row.name,
                    quantity_grams=grams,
                    is_custom=source.is_custom,
                    nutrition=portion_nutrition(source.row, grams),
                    price_contribution=price_contribution(
                        source.row,
                        grams,
                        source.is_custom,
                        settings.standard_ingredient_price_per_100_kcal,
                    ),
                    ingredient_id=None if source.is_custom else source.row.id,
                    custom_ingredient_id=source.row.id if source.is_custom else None,
                )
            )
        return totals

    @staticmethod
    def preview(db: Session, user_id, components: List[CustomMealComponentInput]):
        return CustomMealMapper.totals_to_preview(
            CustomMealService.price_components(db, user_id, components)
        )

    @staticmethod
    def save(db: Session, user_id: UUID, data: CustomMealCreate) -> CustomMeal:
        """
        Persist a custom meal with its components.

        Raises:
            NotFoundError: unknown user or ingredient
            ServiceValidationError: no components, blank name, unknown dietary type
        """
        if not ProfileRepository(db).exists(user_id):
            raise NotFoundError(f"User {user_id} not found")
        if not data.components:
            raise ServiceValidationError(
                "Please add at least one ingredient to your meal"
            )
        if not data.name or not data.name.strip():
            raise ServiceValidationError("Please give your meal a name")
        if data.dietary_type_id and not DietaryTypeRepository(db).exists(
            data.dietary_type_id
        ):
            raise ServiceValidationError(f"Unknown dietary type {data.dietary_type_id}")

        totals = CustomMealService.price_components(db, user_id, data.components)
        nutrition = totals.nutrition

        meal = CustomMeal(
            customer_id=user_id,
            name=data.name.strip(),
            description=data.description,
            base_price=totals.base_price,
            total_price=totals.total_price,
            calories=nutrition.calories,
            protein=nutrition.protein,
            carbs=nutrition.carbs,
            fat=nutrition.fat,
            dietary_type_id=data.dietary_type_id,
            instructions=data.instructions or None,
            status=CustomMealStatus.PENDING,
        )
        meal.components = [
            CustomMealComponent(
                ingredient_id=comp.ingredient_id,
                custom_ingredient_id=comp.custom_ingredient_id,
                quantity_grams=comp.quantity_grams,
                price_contribution=round_to(comp.price_contribution, TWO_DECIMALS),
            )
            for comp in totals.components
        ]

        try:
            db.add(meal)
            db.commit()
        except Exception:
            db.rollback()
            logger.exception("Error saving custom meal for user %s", user_id)
            raise

        logger.info(
            f"custom_meal_saved id={meal.id} user_id={user_id} "
            f"components={len(meal.components)} total={meal.total_price}"
        )
        return CustomMealRepository(db).get_owned(meal.id, user_id)

    @staticmethod
    def list_for_user(db: Session, user_id: UUID) -> List[CustomMeal]:
        return CustomMealRepository(db).list_by_customer(user_id)

    @staticmethod
    def get(db: Session, user_id: UUID, custom_meal_id: UUID) -> CustomMeal:
        meal = CustomMealRepository(db).get_owned(custom_meal_id, user_id)
        if not meal:
            raise NotFoundError(f"Custom meal {custom_meal_id} not found")
        return meal

    @staticmethod
    def delete(db: Session, user_id: UUID, custom_meal_id: UUID) -> bool:
        meal = CustomMealRepository(db).get_owned(custom_meal_id, user_id)
        if not meal:
            return False
        db.delete(meal)
        db.commit()
        logger.info(f"custom_meal_deleted id={custom_meal_id} user_id={user_id}")
        return True

    @staticmethod
    def place_order(
        db: Session, user_id: UUID, custom_meal_id: UUID, customer: CustomerDetails
    ) -> PlacedOrder:
        """
        Order a saved custom meal: one customised order item priced at the
        meal's total, plus the delivery fee, paid cash on delivery.
        """
        meal = CustomMealService.get(db, user_id, custom_meal_id)
        unit_price = to_decimal(meal.total_price)
        delivery_fee = to_decimal(settings.delivery_fee)
        components = CustomMealMapper.stored_components(meal)

        item = OrderItem(
            meal_id=None,
            custom_meal_id=meal.id,
            quantity=1,
            unit_price=unit_price,
            total_price=unit_price,
            is_customized=True,
        )
        order = OrderService.persist_order(
            db,
            customer,
            user_id,
            unit_price + delivery_fee,
            [item],
            payment_method=PaymentMethod.COD,
            notes=f"Custom meal: {meal.name}",
        )

        message = WhatsAppService.build_custom_meal_message(
            name=customer.name,
            phone=customer.phone,
            address=customer.address,
            custom_meal=meal,
            components=components,
            delivery_fee=delivery_fee,
        )
        return PlacedOrder(
            order=order, message=message, whatsapp_url=WhatsAppService.order_link(message)
        )

"""
Custom meal domain mappers.
"""

from domain.models import CustomMeal
from domain.nutrition import (
    CustomMealTotals,
    Nutrition,
    PricedComponent,
    portion_nutrition,
    round_to,
    TWO_DECIMALS,
)
from domain.schemas.custom_meal_schemas import (
    CustomMealComponentResponse,
    CustomMealPreviewResponse,
    CustomMealResponse,
)


class CustomMealMapper:
    """Mapper for custom meal transformations."""

    @staticmethod
    def component_to_response(comp: PricedComponent) -> CustomMealComponentResponse:
        return CustomMealComponentResponse(
            ingredient_id=comp.ingredient_id,
            custom_ingredient_id=comp.custom_ingredient_id,
            name=comp.name,
            quantity_grams=comp.quantity_grams,
            price_contribution=comp.price_contribution,
            calories=round_to(comp.nutrition.calories, TWO_DECIMALS),
            protein=round_to(comp.nutrition.protein, TWO_DECIMALS),
            carbs=round_to(comp.nutrition.carbs, TWO_DECIMALS),
            fat=round_to(comp.nutrition.fat, TWO_DECIMALS),
            is_custom=comp.is_custom,
        )

    @staticmethod
    def totals_to_preview(totals: CustomMealTotals) -> CustomMealPreviewResponse:
        nutrition = totals.nutrition
        return CustomMealPreviewResponse(
            base_price=totals.base_price,
            total_price=totals.total_price,
            calories=nutrition.calories,
            protein=nutrition.protein,
            carbs=nutrition.carbs,
            fat=nutrition.fat,
            components=[
                CustomMealMapper.component_to_response(c) for c in totals.components
            ],
        )

    @staticmethod
    def stored_components(meal: CustomMeal) -> list:
        """Rebuild priced components from stored rows (prices as saved)."""
        priced = []
        for comp in meal.components:
            source = comp.custom_ingredient if comp.is_custom else comp.ingredient
            nutrition = portion_nutrition(source, comp.quantity_grams) if source else None
            priced.append(
                PricedComponent(
                    name=comp.name or "Removed ingredient",
                    quantity_grams=comp.quantity_grams,
                    is_custom=comp.is_custom,
                    nutrition=nutrition if nutrition is not None else Nutrition(),
                    price_contribution=comp.price_contribution,
                    ingredient_id=comp.ingredient_id,
                    custom_ingredient_id=comp.custom_ingredient_id,
                )
            )
        return priced

    @staticmethod
    def to_response(meal: CustomMeal) -> CustomMealResponse:
        components = CustomMealMapper.stored_components(meal)
        return CustomMealResponse(
            id=meal.id,
            customer_id=meal.customer_id,
            name=meal.name,
            description=meal.description,
            dietary_type_id=meal.dietary_type_id,
            instructions=meal.instructions,
            status=meal.status,
            created_at=meal.created_at,
            base_price=meal.base_price,
            total_price=meal.total_price,
            calories=meal.calories,
            protein=meal.protein,
            carbs=meal.carbs,
            fat=meal.fat,
            components=[CustomMealMapper.component_to_response(c) for c in components],
        )

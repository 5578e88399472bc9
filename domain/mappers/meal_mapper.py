"""
Meal domain mappers.
Handles transformation between catalog ORM models and response DTOs.
"""

from domain.models import Meal
from domain.schemas.catalog_schemas import (
    MealDetailResponse,
    MealIngredientResponse,
    MealResponse,
)


class MealMapper:
    """Mapper for catalog meal transformations."""

    @staticmethod
    def to_response(meal: Meal) -> MealResponse:
        return MealResponse.model_validate(meal)

    @staticmethod
    def to_detail(meal: Meal) -> MealDetailResponse:
        """
        Convert a Meal with its ingredient rows loaded to MealDetailResponse.

        Args:
            meal: Meal ORM instance; ``ingredients`` and their ``ingredient``
                relationship should be eagerly loaded

        Returns:
            MealDetailResponse DTO including category/dietary names
        """
        base = MealResponse.model_validate(meal).model_dump()
        ingredients = [
            MealIngredientResponse(
                id=mi.id,
                ingredient_id=mi.ingredient_id,
                quantity_grams=mi.quantity_grams,
                ingredient_name=mi.ingredient.name if mi.ingredient else None,
                is_allergen=bool(mi.ingredient.is_allergen) if mi.ingredient else False,
            )
            for mi in meal.ingredients
        ]
        return MealDetailResponse(
            **base,
            category_name=meal.category.name if meal.category else None,
            dietary_type_name=meal.dietary_type.name if meal.dietary_type else None,
            ingredients=ingredients,
        )

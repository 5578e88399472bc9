"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.meal_repository import (
    MealRepository,
    MealCategoryRepository,
    DietaryTypeRepository,
)
from repositories.ingredient_repository import (
    IngredientRepository,
    IngredientCategoryRepository,
    CustomIngredientRepository,
)
from repositories.order_repository import OrderRepository
from repositories.profile_repository import ProfileRepository, FavoriteRepository
from repositories.custom_meal_repository import CustomMealRepository

__all__ = [
    "BaseRepository",
    "MealRepository",
    "MealCategoryRepository",
    "DietaryTypeRepository",
    "IngredientRepository",
    "IngredientCategoryRepository",
    "CustomIngredientRepository",
    "OrderRepository",
    "ProfileRepository",
    "FavoriteRepository",
    "CustomMealRepository",
]

"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    init_database,
    get_db_session,
)
from domain.models.profile import Profile, GuestCustomer, Favorite
from domain.models.ingredient import (
    IngredientCategory,
    Ingredient,
    UserCustomIngredient,
)
from domain.models.catalog import MealCategory, DietaryType, Meal, MealIngredient
from domain.models.order import Order, OrderItem
from domain.models.custom_meal import CustomMeal, CustomMealComponent

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "init_database",
    "get_db_session",
    # Profile models
    "Profile",
    "GuestCustomer",
    "Favorite",
    # Ingredient models
    "IngredientCategory",
    "Ingredient",
    "UserCustomIngredient",
    # Catalog models
    "MealCategory",
    "DietaryType",
    "Meal",
    "MealIngredient",
    # Order models
    "Order",
    "OrderItem",
    # Custom meal models
    "CustomMeal",
    "CustomMealComponent",
]

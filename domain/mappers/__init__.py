"""
Domain mappers - ORM model to DTO transformations.
"""

from domain.mappers.meal_mapper import MealMapper
from domain.mappers.custom_meal_mapper import CustomMealMapper

__all__ = ["MealMapper", "CustomMealMapper"]

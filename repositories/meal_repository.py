"""
Meal Repository - Data access layer for the menu catalog
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy import or_, func
from sqlalchemy.orm import Session, selectinload

from repositories.base import BaseRepository, LIKE_ESCAPE, contains_pattern
from domain.models import Meal, MealCategory, DietaryType, MealIngredient
from domain.enums import CalorieRange, MealSort
from domain.schemas.catalog_schemas import MealSearchFilters

# Calorie buckets used by the storefront filter
LOW_CALORIE_LIMIT = 500
HIGH_CALORIE_LIMIT = 700

_SORT_ORDER = {
    MealSort.DEFAULT: (Meal.name.asc(),),
    MealSort.NAME: (Meal.name.asc(),),
    MealSort.PRICE_ASC: (Meal.price.asc(), Meal.name.asc()),
    MealSort.PRICE_DESC: (Meal.price.desc(), Meal.name.asc()),
    MealSort.CALORIES_ASC: (Meal.calories.asc(), Meal.name.asc()),
    MealSort.PROTEIN_DESC: (Meal.protein.desc(), Meal.name.asc()),
}


class MealRepository(BaseRepository[Meal]):
    """Repository for catalog meals"""

    def __init__(self, db: Session):
        super().__init__(db, Meal)

    def get_with_ingredients(self, meal_id: UUID) -> Optional[Meal]:
        return (
            self.db.query(Meal)
            .options(
                selectinload(Meal.ingredients).selectinload(MealIngredient.ingredient)
            )
            .filter(Meal.id == meal_id)
            .first()
        )

    def list_ordered(self) -> List[Meal]:
        return self.db.query(Meal).order_by(Meal.name).all()

    def search(self, filters: MealSearchFilters) -> List[Meal]:
        """Apply the storefront filters; each one narrows the result further"""
        query = self.db.query(Meal)

        if filters.dietary_type_id:
            query = query.filter(Meal.dietary_type_id == filters.dietary_type_id)

        if filters.search and filters.search.strip():
            pattern = contains_pattern(filters.search)
            query = query.filter(
                or_(
                    func.lower(Meal.name).like(pattern, escape=LIKE_ESCAPE),
                    func.lower(func.coalesce(Meal.description, "")).like(
                        pattern, escape=LIKE_ESCAPE
                    ),
                )
            )

        if filters.category_id:
            query = query.filter(Meal.category_id == filters.category_id)

        if filters.food_type is not None:
            query = query.filter(Meal.food_type == filters.food_type)

        if filters.available_only:
            query = query.filter(Meal.is_available.is_(True))

        if filters.calorie_range == CalorieRange.LOW:
            query = query.filter(Meal.calories < LOW_CALORIE_LIMIT)
        elif filters.calorie_range == CalorieRange.MEDIUM:
            query = query.filter(
                Meal.calories >= LOW_CALORIE_LIMIT, Meal.calories <= HIGH_CALORIE_LIMIT
            )
        elif filters.calorie_range == CalorieRange.HIGH:
            query = query.filter(Meal.calories > HIGH_CALORIE_LIMIT)

        return query.order_by(*_SORT_ORDER[filters.sort]).all()

    def count_by_category(self, category_id: UUID) -> int:
        return (
            self.db.query(func.count(Meal.id))
            .filter(Meal.category_id == category_id)
            .scalar()
            or 0
        )


class MealCategoryRepository(BaseRepository[MealCategory]):
    """Repository for menu categories"""

    def __init__(self, db: Session):
        super().__init__(db, MealCategory)

    def list_ordered(self) -> List[MealCategory]:
        return (
            self.db.query(MealCategory)
            .order_by(MealCategory.display_order, MealCategory.name)
            .all()
        )

    def get_by_name(self, name: str) -> Optional[MealCategory]:
        return (
            self.db.query(MealCategory)
            .filter(func.lower(MealCategory.name) == name.lower())
            .first()
        )


class DietaryTypeRepository(BaseRepository[DietaryType]):
    """Repository for dietary types"""

    def __init__(self, db: Session):
        super().__init__(db, DietaryType)

    def list_ordered(self) -> List[DietaryType]:
        return self.db.query(DietaryType).order_by(DietaryType.name).all()

    def get_by_name(self, name: str) -> Optional[DietaryType]:
        return (
            self.db.query(DietaryType)
            .filter(func.lower(DietaryType.name) == name.lower())
            .first()
        )

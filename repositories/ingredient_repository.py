"""
Ingredient Repository - Data access layer for the master ingredient table
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy import or_, func
from sqlalchemy.orm import Session, selectinload

from repositories.base import BaseRepository, LIKE_ESCAPE, contains_pattern
from domain.models import (
    Ingredient,
    IngredientCategory,
    MealIngredient,
    UserCustomIngredient,
)


class IngredientRepository(BaseRepository[Ingredient]):
    """Repository for catalog ingredients"""

    def __init__(self, db: Session):
        super().__init__(db, Ingredient)

    def get_by_name(self, name: str) -> Optional[Ingredient]:
        """Case-insensitive lookup by name"""
        return (
            self.db.query(Ingredient)
            .filter(func.lower(Ingredient.name) == name.strip().lower())
            .first()
        )

    def search(
        self, search: Optional[str] = None, category_id: Optional[UUID] = None
    ) -> List[Ingredient]:
        query = self.db.query(Ingredient).options(selectinload(Ingredient.category))
        if category_id:
            query = query.filter(Ingredient.category_id == category_id)
        if search and search.strip():
            pattern = contains_pattern(search)
            query = query.filter(
                or_(
                    func.lower(Ingredient.name).like(pattern, escape=LIKE_ESCAPE),
                    func.lower(func.coalesce(Ingredient.description, "")).like(
                        pattern, escape=LIKE_ESCAPE
                    ),
                )
            )
        return query.order_by(Ingredient.name).all()

    def count_meal_usages(self, ingredient_id: UUID) -> int:
        """Number of catalog meals whose composition references the ingredient"""
        return (
            self.db.query(func.count(func.distinct(MealIngredient.meal_id)))
            .filter(MealIngredient.ingredient_id == ingredient_id)
            .scalar()
            or 0
        )


class IngredientCategoryRepository(BaseRepository[IngredientCategory]):
    """Repository for ingredient categories"""

    def __init__(self, db: Session):
        super().__init__(db, IngredientCategory)

    def list_ordered(self) -> List[IngredientCategory]:
        return (
            self.db.query(IngredientCategory)
            .order_by(IngredientCategory.display_order, IngredientCategory.name)
            .all()
        )


class CustomIngredientRepository(BaseRepository[UserCustomIngredient]):
    """Repository for customer-defined ingredients"""

    def __init__(self, db: Session):
        super().__init__(db, UserCustomIngredient)

    def get_by_customer(self, customer_id: UUID) -> List[UserCustomIngredient]:
        return (
            self.db.query(UserCustomIngredient)
            .filter(UserCustomIngredient.customer_id == customer_id)
            .order_by(UserCustomIngredient.name)
            .all()
        )

    def get_owned(
        self, ingredient_id: UUID, customer_id: UUID
    ) -> Optional[UserCustomIngredient]:
        """Get custom ingredient for specific customer (authorization check)"""
        return (
            self.db.query(UserCustomIngredient)
            .filter(
                UserCustomIngredient.id == ingredient_id,
                UserCustomIngredient.customer_id == customer_id,
            )
            .first()
        )

    def get_many_owned(
        self, ingredient_ids: List[UUID], customer_id: UUID
    ) -> List[UserCustomIngredient]:
        if not ingredient_ids:
            return []
        return (
            self.db.query(UserCustomIngredient)
            .filter(
                UserCustomIngredient.id.in_(ingredient_ids),
                UserCustomIngredient.customer_id == customer_id,
            )
            .all()
        )

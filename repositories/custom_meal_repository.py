"""
Custom Meal Repository - Data access layer for customer-built meals
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session, selectinload

from repositories.base import BaseRepository
from domain.models import CustomMeal, CustomMealComponent


def _with_components(query):
    return query.options(
        selectinload(CustomMeal.components).selectinload(
            CustomMealComponent.ingredient
        ),
        selectinload(CustomMeal.components).selectinload(
            CustomMealComponent.custom_ingredient
        ),
    )


class CustomMealRepository(BaseRepository[CustomMeal]):
    """Repository for custom meals"""

    def __init__(self, db: Session):
        super().__init__(db, CustomMeal)

    def get_owned(self, custom_meal_id: UUID, customer_id: UUID) -> Optional[CustomMeal]:
        """Get custom meal by ID for specific customer (authorization check)"""
        return (
            _with_components(self.db.query(CustomMeal))
            .filter(
                CustomMeal.id == custom_meal_id, CustomMeal.customer_id == customer_id
            )
            .first()
        )

    def list_by_customer(self, customer_id: UUID) -> List[CustomMeal]:
        return (
            _with_components(self.db.query(CustomMeal))
            .filter(CustomMeal.customer_id == customer_id)
            .order_by(CustomMeal.created_at.desc())
            .all()
        )

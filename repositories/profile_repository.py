"""
Profile Repository - Data access layer for customer profiles and favorites
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import Profile, Favorite, Meal


class ProfileRepository(BaseRepository[Profile]):
    """Repository for profile data access"""

    def __init__(self, db: Session):
        super().__init__(db, Profile)

    def get_by_email(self, email: str) -> Optional[Profile]:
        return self.db.query(Profile).filter(Profile.email == email).first()

    def list_ordered(self) -> List[Profile]:
        return self.db.query(Profile).order_by(Profile.created_at.desc()).all()


class FavoriteRepository(BaseRepository[Favorite]):
    """Repository for favorite meals"""

    def __init__(self, db: Session):
        super().__init__(db, Favorite)

    def get(self, user_id: UUID, meal_id: UUID) -> Optional[Favorite]:
        return (
            self.db.query(Favorite)
            .filter(Favorite.user_id == user_id, Favorite.meal_id == meal_id)
            .first()
        )

    def meal_ids_for_user(self, user_id: UUID) -> List[UUID]:
        rows = (
            self.db.query(Favorite.meal_id)
            .filter(Favorite.user_id == user_id)
            .order_by(Favorite.created_at)
            .all()
        )
        return [meal_id for (meal_id,) in rows]

    def meals_for_user(self, user_id: UUID) -> List[Meal]:
        return (
            self.db.query(Meal)
            .join(Favorite, Favorite.meal_id == Meal.id)
            .filter(Favorite.user_id == user_id)
            .order_by(Meal.name)
            .all()
        )

    def delete_for_user(self, user_id: UUID, meal_id: UUID) -> bool:
        result = (
            self.db.query(Favorite)
            .filter(Favorite.user_id == user_id, Favorite.meal_id == meal_id)
            .delete()
        )
        self.db.commit()
        return result > 0

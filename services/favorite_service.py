from typing import List
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import logging

from domain.models import Favorite, Meal
from repositories import FavoriteRepository, MealRepository, ProfileRepository
from app.exceptions import NotFoundError

logger = logging.getLogger("honestmeals.favorites")


class FavoriteService:
    @staticmethod
    def _check(db: Session, user_id: UUID, meal_id: UUID) -> None:
        if not ProfileRepository(db).exists(user_id):
            raise NotFoundError(f"User {user_id} not found")
        if not MealRepository(db).exists(meal_id):
            raise NotFoundError(f"Meal {meal_id} not found")

    @staticmethod
    def list_meal_ids(db: Session, user_id: UUID) -> List[UUID]:
        return FavoriteRepository(db).meal_ids_for_user(user_id)

    @staticmethod
    def list_meals(db: Session, user_id: UUID) -> List[Meal]:
        return FavoriteRepository(db).meals_for_user(user_id)

    @staticmethod
    def add(db: Session, user_id: UUID, meal_id: UUID) -> bool:
        """Mark a meal as favorite; returns False when it already was."""
        FavoriteService._check(db, user_id, meal_id)
        repo = FavoriteRepository(db)
        if repo.get(user_id, meal_id):
            return False
        try:
            repo.create(Favorite(user_id=user_id, meal_id=meal_id))
        except IntegrityError:
            # added concurrently; the end state is the same
            db.rollback()
            return False
        logger.info(f"favorite_added user_id={user_id} meal_id={meal_id}")
        return True

    @staticmethod
    def remove(db: Session, user_id: UUID, meal_id: UUID) -> bool:
        removed = FavoriteRepository(db).delete_for_user(user_id, meal_id)
        if removed:
            logger.info(f"favorite_removed user_id={user_id} meal_id={meal_id}")
        return removed

    @staticmethod
    def toggle(db: Session, user_id: UUID, meal_id: UUID) -> bool:
        """Flip the favorite flag; returns the new state."""
        if FavoriteRepository(db).get(user_id, meal_id):
            FavoriteService.remove(db, user_id, meal_id)
            return False
        FavoriteService.add(db, user_id, meal_id)
        return True

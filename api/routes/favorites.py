"""Favorite meals of the signed-in customer"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from uuid import UUID
from typing import List

from api.dependencies import get_db, get_current_user_id
from domain.mappers import MealMapper
from domain.schemas.catalog_schemas import MealResponse
from domain.schemas.profile_schemas import FavoriteToggleResponse
from services.favorite_service import FavoriteService

router = APIRouter(prefix="/favorites", tags=["Favorites"])


@router.get("", response_model=List[MealResponse])
def list_favorites(
    user_id: UUID = Depends(get_current_user_id), db: Session = Depends(get_db)
):
    return [MealMapper.to_response(m) for m in FavoriteService.list_meals(db, user_id)]


@router.get("/ids", response_model=List[UUID])
def list_favorite_ids(
    user_id: UUID = Depends(get_current_user_id), db: Session = Depends(get_db)
):
    """Meal ids only, for marking hearts on the menu"""
    return FavoriteService.list_meal_ids(db, user_id)


@router.put("/{meal_id}", response_model=FavoriteToggleResponse)
def add_favorite(
    meal_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    FavoriteService.add(db, user_id, meal_id)
    return FavoriteToggleResponse(meal_id=meal_id, is_favorite=True)


@router.delete("/{meal_id}", response_model=FavoriteToggleResponse)
def remove_favorite(
    meal_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    FavoriteService.remove(db, user_id, meal_id)
    return FavoriteToggleResponse(meal_id=meal_id, is_favorite=False)


@router.post("/{meal_id}/toggle", response_model=FavoriteToggleResponse)
def toggle_favorite(
    meal_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    is_favorite = FavoriteService.toggle(db, user_id, meal_id)
    return FavoriteToggleResponse(meal_id=meal_id, is_favorite=is_favorite)

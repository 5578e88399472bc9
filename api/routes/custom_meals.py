"""Custom meal builder routes"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List, Optional

from api.dependencies import get_db, get_current_user_id, get_optional_user_id
from api.responses import DeletedResponse
from api.routes.orders import placed_response
from domain.mappers import CustomMealMapper
from domain.schemas.custom_meal_schemas import (
    CustomMealCreate,
    CustomMealOrderRequest,
    CustomMealPreviewRequest,
    CustomMealPreviewResponse,
    CustomMealResponse,
)
from domain.schemas.order_schemas import OrderPlacedResponse
from services.custom_meal_service import CustomMealService
from app.exceptions import NotFoundError

router = APIRouter(prefix="/custom-meals", tags=["Custom Meals"])
logger = logging.getLogger("honestmeals.api.custom_meals")


@router.post("/preview", response_model=CustomMealPreviewResponse)
def preview_custom_meal(
    payload: CustomMealPreviewRequest,
    user_id: Optional[UUID] = Depends(get_optional_user_id),
    db: Session = Depends(get_db),
):
    """Nutrition and price of a meal being built, nothing is saved"""
    return CustomMealService.preview(db, user_id, payload.components)


@router.post("", response_model=CustomMealResponse, status_code=status.HTTP_201_CREATED)
def save_custom_meal(
    payload: CustomMealCreate,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    meal = CustomMealService.save(db, user_id, payload)
    return CustomMealMapper.to_response(meal)


@router.get("", response_model=List[CustomMealResponse])
def list_custom_meals(
    user_id: UUID = Depends(get_current_user_id), db: Session = Depends(get_db)
):
    return [
        CustomMealMapper.to_response(m)
        for m in CustomMealService.list_for_user(db, user_id)
    ]


@router.get("/{custom_meal_id}", response_model=CustomMealResponse)
def get_custom_meal(
    custom_meal_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return CustomMealMapper.to_response(
        CustomMealService.get(db, user_id, custom_meal_id)
    )


@router.delete("/{custom_meal_id}", response_model=DeletedResponse)
def delete_custom_meal(
    custom_meal_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    if not CustomMealService.delete(db, user_id, custom_meal_id):
        raise NotFoundError(f"Custom meal {custom_meal_id} not found")
    return DeletedResponse(deleted=str(custom_meal_id))


@router.post(
    "/{custom_meal_id}/order",
    response_model=OrderPlacedResponse,
    status_code=status.HTTP_201_CREATED,
)
def order_custom_meal(
    custom_meal_id: UUID,
    payload: CustomMealOrderRequest,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Order a saved custom meal, paid cash on delivery"""
    placed = CustomMealService.place_order(db, user_id, custom_meal_id, payload.customer)
    return placed_response(placed)

"""Ingredient browsing and customer-defined ingredients"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List, Optional

from api.dependencies import get_db, get_current_user_id
from api.responses import DeletedResponse
from domain.schemas.ingredient_schemas import (
    CustomIngredientCreate,
    CustomIngredientResponse,
    IngredientCategoryResponse,
    IngredientResponse,
)
from services.ingredient_service import IngredientService
from app.exceptions import NotFoundError

router = APIRouter(tags=["Ingredients"])
logger = logging.getLogger("honestmeals.api.ingredients")


@router.get("/ingredients", response_model=List[IngredientResponse])
def search_ingredients(
    search: Optional[str] = Query(None),
    category_id: Optional[UUID] = Query(None),
    db: Session = Depends(get_db),
):
    """Catalog ingredients ordered by name"""
    items = IngredientService.search(db, search, category_id)
    return [IngredientResponse.model_validate(i) for i in items]


@router.get("/ingredient-categories", response_model=List[IngredientCategoryResponse])
def list_ingredient_categories(db: Session = Depends(get_db)):
    return [
        IngredientCategoryResponse.model_validate(c)
        for c in IngredientService.list_categories(db)
    ]


@router.get("/ingredients/{ingredient_id}", response_model=IngredientResponse)
def get_ingredient(ingredient_id: UUID, db: Session = Depends(get_db)):
    return IngredientResponse.model_validate(IngredientService.get(db, ingredient_id))


@router.get("/me/ingredients", response_model=List[CustomIngredientResponse])
def list_my_ingredients(
    user_id: UUID = Depends(get_current_user_id), db: Session = Depends(get_db)
):
    """The caller's own custom ingredients"""
    items = IngredientService.list_custom(db, user_id)
    return [CustomIngredientResponse.model_validate(i) for i in items]


@router.post(
    "/me/ingredients",
    response_model=CustomIngredientResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_my_ingredient(
    payload: CustomIngredientCreate,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    ingredient = IngredientService.create_custom(db, user_id, payload)
    return CustomIngredientResponse.model_validate(ingredient)


@router.delete("/me/ingredients/{ingredient_id}", response_model=DeletedResponse)
def delete_my_ingredient(
    ingredient_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    if not IngredientService.delete_custom(db, user_id, ingredient_id):
        raise NotFoundError(f"Custom ingredient {ingredient_id} not found")
    return DeletedResponse(deleted=str(ingredient_id))

"""Storefront catalog routes (meals, categories, dietary types)"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List, Optional

from api.dependencies import get_db
from domain.enums import CalorieRange, MealSort
from domain.schemas.catalog_schemas import (
    DietaryTypeResponse,
    MealCategoryResponse,
    MealDetailResponse,
    MealResponse,
    MealSearchFilters,
)
from domain.mappers import MealMapper
from services.catalog_service import CatalogService

router = APIRouter(tags=["Catalog"])
logger = logging.getLogger("honestmeals.api.catalog")


def meal_filters(
    search: Optional[str] = Query(None, description="Match in name or description"),
    category_id: Optional[UUID] = Query(None),
    dietary_type_id: Optional[UUID] = Query(None),
    food_type: Optional[bool] = Query(None, description="true = veg, false = non-veg"),
    available_only: bool = Query(False),
    calorie_range: Optional[CalorieRange] = Query(None),
    sort: MealSort = Query(MealSort.DEFAULT),
) -> MealSearchFilters:
    return MealSearchFilters(
        search=search,
        category_id=category_id,
        dietary_type_id=dietary_type_id,
        food_type=food_type,
        available_only=available_only,
        calorie_range=calorie_range,
        sort=sort,
    )


@router.get("/categories", response_model=List[MealCategoryResponse])
def list_categories(db: Session = Depends(get_db)):
    """Menu categories in display order"""
    return [
        MealCategoryResponse.model_validate(c)
        for c in CatalogService.list_categories(db)
    ]


@router.get("/dietary-types", response_model=List[DietaryTypeResponse])
def list_dietary_types(db: Session = Depends(get_db)):
    return [
        DietaryTypeResponse.model_validate(d)
        for d in CatalogService.list_dietary_types(db)
    ]


@router.get("/meals", response_model=List[MealResponse])
def search_meals(
    filters: MealSearchFilters = Depends(meal_filters), db: Session = Depends(get_db)
):
    """
    Browse the menu.

    All filters are optional and combine with AND. Calorie ranges:
    low < 500, medium 500-700, high > 700.
    """
    meals = CatalogService.search_meals(db, filters)
    return [MealMapper.to_response(m) for m in meals]


@router.get("/meals/{meal_id}", response_model=MealDetailResponse)
def get_meal(meal_id: UUID, db: Session = Depends(get_db)):
    """Meal with its ingredient composition"""
    return MealMapper.to_detail(CatalogService.get_meal(db, meal_id))

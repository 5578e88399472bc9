from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime
from uuid import UUID
from decimal import Decimal

from domain.enums import CalorieRange, MealSort


class MealCategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    display_order: int = Field(default=0, ge=0)


class MealCategoryResponse(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    display_order: int

    model_config = {"from_attributes": True}


class DietaryTypeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class DietaryTypeResponse(BaseModel):
    id: UUID
    name: str

    model_config = {"from_attributes": True}


class MealIngredientInput(BaseModel):
    """Ingredient portion attached to a catalog meal"""

    ingredient_id: UUID
    quantity_grams: Decimal = Field(..., gt=0, le=5000)


class MealIngredientResponse(BaseModel):
    id: UUID
    ingredient_id: UUID
    quantity_grams: Decimal
    ingredient_name: Optional[str] = None
    is_allergen: bool = False


class MealBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0)
    calories: int = Field(default=0, ge=0)
    protein: Decimal = Field(default=Decimal("0"), ge=0)
    carbs: Decimal = Field(default=Decimal("0"), ge=0)
    fat: Decimal = Field(default=Decimal("0"), ge=0)
    fiber: Optional[Decimal] = Field(default=None, ge=0)
    image_url: Optional[str] = None
    category_id: UUID
    dietary_type_id: Optional[UUID] = None
    food_type: Optional[bool] = Field(
        default=None, description="True for vegetarian, False for non-vegetarian"
    )
    is_available: bool = True
    spice_level: Optional[int] = Field(default=None, ge=0, le=5)
    cooking_time_minutes: Optional[int] = Field(default=None, ge=0)


class MealCreate(MealBase):
    ingredients: List[MealIngredientInput] = Field(default_factory=list)
    calculate_nutrition: bool = Field(
        default=False,
        description="Derive calories and macros from the ingredient list",
    )


class MealUpdate(BaseModel):
    """Partial update; omitted fields keep their value"""

    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0)
    calories: Optional[int] = Field(default=None, ge=0)
    protein: Optional[Decimal] = Field(default=None, ge=0)
    carbs: Optional[Decimal] = Field(default=None, ge=0)
    fat: Optional[Decimal] = Field(default=None, ge=0)
    fiber: Optional[Decimal] = Field(default=None, ge=0)
    image_url: Optional[str] = None
    category_id: Optional[UUID] = None
    dietary_type_id: Optional[UUID] = None
    food_type: Optional[bool] = None
    is_available: Optional[bool] = None
    spice_level: Optional[int] = Field(default=None, ge=0, le=5)
    cooking_time_minutes: Optional[int] = Field(default=None, ge=0)
    ingredients: Optional[List[MealIngredientInput]] = None
    calculate_nutrition: bool = False

    @field_validator(
        "name",
        "price",
        "calories",
        "protein",
        "carbs",
        "fat",
        "category_id",
        "is_available",
    )
    @classmethod
    def not_null(cls, v):
        # only runs for values the client sent; omitted fields stay unset
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class MealAvailabilityUpdate(BaseModel):
    is_available: bool


class MealResponse(MealBase):
    id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class MealDetailResponse(MealResponse):
    category_name: Optional[str] = None
    dietary_type_name: Optional[str] = None
    ingredients: List[MealIngredientResponse] = Field(default_factory=list)


class MealSearchFilters(BaseModel):
    """Catalog filters; every filter is optional and they combine with AND"""

    search: Optional[str] = None
    category_id: Optional[UUID] = None
    dietary_type_id: Optional[UUID] = None
    food_type: Optional[bool] = None
    available_only: bool = False
    calorie_range: Optional[CalorieRange] = None
    sort: MealSort = MealSort.DEFAULT


class NutritionResponse(BaseModel):
    calories: int
    protein: Decimal
    carbs: Decimal
    fat: Decimal

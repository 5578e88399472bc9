from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from uuid import UUID
from decimal import Decimal


class IngredientCategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    display_order: int = Field(default=0, ge=0)


class IngredientCategoryResponse(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    display_order: int

    model_config = {"from_attributes": True}


class NutritionPer100g(BaseModel):
    calories_per_100g: Decimal = Field(..., ge=0)
    protein_per_100g: Decimal = Field(..., ge=0)
    carbs_per_100g: Decimal = Field(..., ge=0)
    fat_per_100g: Decimal = Field(..., ge=0)


class IngredientCreate(NutritionPer100g):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    price_per_100g: Decimal = Field(default=Decimal("0"), ge=0)
    is_allergen: bool = False
    category_id: Optional[UUID] = None


class IngredientUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    calories_per_100g: Optional[Decimal] = Field(default=None, ge=0)
    protein_per_100g: Optional[Decimal] = Field(default=None, ge=0)
    carbs_per_100g: Optional[Decimal] = Field(default=None, ge=0)
    fat_per_100g: Optional[Decimal] = Field(default=None, ge=0)
    price_per_100g: Optional[Decimal] = Field(default=None, ge=0)
    is_allergen: Optional[bool] = None
    category_id: Optional[UUID] = None

    @field_validator(
        "name",
        "calories_per_100g",
        "protein_per_100g",
        "carbs_per_100g",
        "fat_per_100g",
        "price_per_100g",
        "is_allergen",
    )
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class IngredientResponse(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    calories_per_100g: Decimal
    protein_per_100g: Decimal
    carbs_per_100g: Decimal
    fat_per_100g: Decimal
    price_per_100g: Decimal
    is_allergen: bool
    category_id: Optional[UUID] = None
    category_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class CustomIngredientCreate(NutritionPer100g):
    """Customer-defined ingredient, defaults mirror the builder's form"""

    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    calories_per_100g: Decimal = Field(default=Decimal("100"), ge=0)
    protein_per_100g: Decimal = Field(default=Decimal("5"), ge=0)
    carbs_per_100g: Decimal = Field(default=Decimal("10"), ge=0)
    fat_per_100g: Decimal = Field(default=Decimal("5"), ge=0)
    price_per_100g: Decimal = Field(default=Decimal("10"), ge=0)
    is_private: bool = True


class CustomIngredientResponse(BaseModel):
    id: UUID
    customer_id: UUID
    name: str
    description: Optional[str] = None
    calories_per_100g: Decimal
    protein_per_100g: Decimal
    carbs_per_100g: Decimal
    fat_per_100g: Decimal
    price_per_100g: Decimal
    is_private: bool
    is_custom: bool = True
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

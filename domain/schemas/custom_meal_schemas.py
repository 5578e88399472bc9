from pydantic import BaseModel, Field, model_validator
from typing import Optional, List
from datetime import datetime
from uuid import UUID
from decimal import Decimal

from domain.enums import CustomMealStatus
from domain.schemas.order_schemas import CustomerDetails


class CustomMealComponentInput(BaseModel):
    """One ingredient portion; exactly one of the two ids must be set"""

    ingredient_id: Optional[UUID] = None
    custom_ingredient_id: Optional[UUID] = None
    quantity_grams: Optional[Decimal] = Field(default=None, gt=0, le=2000)

    @model_validator(mode="after")
    def exactly_one_source(self):
        if (self.ingredient_id is None) == (self.custom_ingredient_id is None):
            raise ValueError(
                "Provide exactly one of ingredient_id or custom_ingredient_id"
            )
        return self


class CustomMealPreviewRequest(BaseModel):
    components: List[CustomMealComponentInput] = Field(default_factory=list)


class CustomMealCreate(CustomMealPreviewRequest):
    name: str = Field(default="My Custom Meal", max_length=200)
    description: Optional[str] = None
    dietary_type_id: Optional[UUID] = None
    instructions: Optional[str] = Field(default=None, max_length=2000)


class CustomMealComponentResponse(BaseModel):
    ingredient_id: Optional[UUID] = None
    custom_ingredient_id: Optional[UUID] = None
    name: Optional[str] = None
    quantity_grams: Decimal
    price_contribution: Decimal
    calories: Decimal
    protein: Decimal
    carbs: Decimal
    fat: Decimal
    is_custom: bool


class CustomMealPreviewResponse(BaseModel):
    base_price: Decimal
    total_price: Decimal
    calories: Decimal
    protein: Decimal
    carbs: Decimal
    fat: Decimal
    components: List[CustomMealComponentResponse]


class CustomMealResponse(CustomMealPreviewResponse):
    id: UUID
    customer_id: UUID
    name: str
    description: Optional[str] = None
    dietary_type_id: Optional[UUID] = None
    instructions: Optional[str] = None
    status: CustomMealStatus
    created_at: Optional[datetime] = None


class CustomMealOrderRequest(BaseModel):
    customer: CustomerDetails

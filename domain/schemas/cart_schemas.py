"""Schemas for pricing a client-side cart"""

from pydantic import BaseModel, Field
from typing import List
from uuid import UUID
from decimal import Decimal


class CartItemInput(BaseModel):
    meal_id: UUID
    quantity: int = Field(..., ge=1, le=100)


class CartQuoteRequest(BaseModel):
    items: List[CartItemInput] = Field(default_factory=list)


class CartLineResponse(BaseModel):
    meal_id: UUID
    name: str
    price: Decimal
    quantity: int
    line_total: Decimal
    calories: int
    protein: Decimal

    model_config = {"from_attributes": True}


class CartQuoteResponse(BaseModel):
    lines: List[CartLineResponse]
    item_count: int
    subtotal: Decimal
    delivery_fee: Decimal
    total: Decimal
    total_calories: int
    total_protein: Decimal

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime
from uuid import UUID
from decimal import Decimal

from domain.enums import OrderStatus, PaymentStatus, PaymentMethod
from domain.schemas.cart_schemas import CartItemInput


class CustomerDetails(BaseModel):
    """Delivery contact captured at checkout; all three fields are required"""

    name: str = Field(..., max_length=200)
    phone: str = Field(..., max_length=30)
    address: str = Field(..., max_length=1000)

    @field_validator("name", "phone", "address")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class OrderCreate(BaseModel):
    customer: CustomerDetails
    items: List[CartItemInput] = Field(default_factory=list)
    note: Optional[str] = Field(default=None, max_length=1000)
    payment_method: PaymentMethod = PaymentMethod.COD


class OrderStatusUpdate(BaseModel):
    status: OrderStatus
    note: Optional[str] = Field(default=None, max_length=1000)


class OrderItemResponse(BaseModel):
    id: UUID
    meal_id: Optional[UUID] = None
    custom_meal_id: Optional[UUID] = None
    name: Optional[str] = None
    quantity: int
    unit_price: Decimal
    total_price: Decimal
    is_customized: bool

    model_config = {"from_attributes": True}


class OrderResponse(BaseModel):
    id: UUID
    customer_id: Optional[UUID] = None
    guest_customer_id: Optional[UUID] = None
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    total_amount: Decimal
    status: OrderStatus
    delivery_address: str
    notes: Optional[str] = None
    admin_notes: Optional[str] = None
    payment_method: str
    payment_status: PaymentStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    items: List[OrderItemResponse] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class OrderPlacedResponse(BaseModel):
    """Result of checkout: the stored order and the WhatsApp hand-off link"""

    order: OrderResponse
    whatsapp_url: str
    message: str

"""Checkout and customer order routes"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List, Optional

from api.dependencies import get_db, get_current_user_id, get_optional_user_id
from domain.schemas.order_schemas import (
    OrderCreate,
    OrderPlacedResponse,
    OrderResponse,
)
from services.order_service import OrderService, PlacedOrder

router = APIRouter(prefix="/orders", tags=["Orders"])
logger = logging.getLogger("honestmeals.api.orders")


def placed_response(placed: PlacedOrder) -> OrderPlacedResponse:
    return OrderPlacedResponse(
        order=OrderResponse.model_validate(placed.order),
        whatsapp_url=placed.whatsapp_url,
        message=placed.message,
    )


@router.post("", response_model=OrderPlacedResponse, status_code=status.HTTP_201_CREATED)
def place_order(
    payload: OrderCreate,
    user_id: Optional[UUID] = Depends(get_optional_user_id),
    db: Session = Depends(get_db),
):
    """
    Checkout. Guests and signed-in customers can order; the response carries
    the WhatsApp link that hands the order summary to the kitchen.
    """
    return placed_response(OrderService.create_order(db, payload, user_id))


@router.get("", response_model=List[OrderResponse])
def list_my_orders(
    user_id: UUID = Depends(get_current_user_id), db: Session = Depends(get_db)
):
    """The caller's orders, newest first"""
    return [
        OrderResponse.model_validate(o) for o in OrderService.list_for_user(db, user_id)
    ]


@router.get("/{order_id}", response_model=OrderResponse)
def get_my_order(
    order_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return OrderResponse.model_validate(OrderService.get_order(db, order_id, user_id))


@router.post("/{order_id}/cancel", response_model=OrderResponse)
def cancel_my_order(
    order_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Cancel an order that has not been approved yet"""
    return OrderResponse.model_validate(OrderService.cancel_order(db, order_id, user_id))

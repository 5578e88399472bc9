"""Cart pricing route"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.dependencies import get_db
from domain.schemas.cart_schemas import CartQuoteRequest, CartQuoteResponse
from services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["Cart"])


@router.post("/quote", response_model=CartQuoteResponse)
def quote_cart(payload: CartQuoteRequest, db: Session = Depends(get_db)):
    """
    Price a client-side cart with current menu prices.

    Duplicate meals are merged. Unknown meals give 404, unavailable meals
    and an empty cart give 400.
    """
    return CartService.quote(db, payload.items)

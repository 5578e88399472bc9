from typing import List
from sqlalchemy.orm import Session
import logging

from app.config import settings
from domain.cart import Cart
from domain.schemas.cart_schemas import (
    CartItemInput,
    CartLineResponse,
    CartQuoteResponse,
)
from repositories import MealRepository
from app.exceptions import NotFoundError, ServiceValidationError

logger = logging.getLogger("honestmeals.cart")


class CartService:
    @staticmethod
    def build_cart(db: Session, items: List[CartItemInput]) -> Cart:
        """
        Rebuild a client cart from catalog rows using current server prices.

        Duplicate meal ids are merged into one line.

        Raises:
            ServiceValidationError: empty cart or unavailable meal
            NotFoundError: meal id not in the catalog
        """
        if not items:
            raise ServiceValidationError("Your cart is empty")

        meals = {m.id: m for m in MealRepository(db).get_many([i.meal_id for i in items])}
        cart = Cart(delivery_fee=settings.delivery_fee)
        for item in items:
            meal = meals.get(item.meal_id)
            if meal is None:
                raise NotFoundError(f"Meal {item.meal_id} not found")
            if not meal.is_available:
                raise ServiceValidationError(
                    f"{meal.name} is currently unavailable",
                    details={"meal_id": str(meal.id)},
                )
            cart.add(meal, item.quantity)
        return cart

    @staticmethod
    def to_quote(cart: Cart) -> CartQuoteResponse:
        return CartQuoteResponse(
            lines=[
                CartLineResponse(
                    meal_id=line.meal_id,
                    name=line.name,
                    price=line.price,
                    quantity=line.quantity,
                    line_total=line.line_total,
                    calories=line.calories,
                    protein=line.protein,
                )
                for line in cart.lines
            ],
            item_count=cart.item_count,
            subtotal=cart.subtotal,
            delivery_fee=cart.delivery_fee,
            total=cart.total,
            total_calories=cart.total_calories,
            total_protein=cart.total_protein,
        )

    @staticmethod
    def quote(db: Session, items: List[CartItemInput]) -> CartQuoteResponse:
        cart = CartService.build_cart(db, items)
        logger.debug(f"cart_quoted lines={len(cart.lines)} total={cart.total}")
        return CartService.to_quote(cart)

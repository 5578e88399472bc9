"""
Cart arithmetic.

The storefront keeps the cart on the client; the server rebuilds it from
catalog rows to price it and to turn it into order items.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from domain.nutrition import to_decimal


@dataclass
class CartLine:
    meal_id: UUID
    name: str
    price: Decimal
    quantity: int = 1
    calories: int = 0
    protein: Decimal = Decimal("0")

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


@dataclass
class Cart:
    delivery_fee: Decimal = Decimal("0")
    lines: List[CartLine] = field(default_factory=list)

    def find(self, meal_id: UUID) -> Optional[CartLine]:
        for line in self.lines:
            if line.meal_id == meal_id:
                return line
        return None

    def add(self, meal, quantity: int = 1) -> CartLine:
        """Add a meal row, bumping the quantity when it is already in the cart."""
        if quantity <= 0:
            raise ValueError("quantity must be positive")
        line = self.find(meal.id)
        if line is not None:
            line.quantity += quantity
            return line
        line = CartLine(
            meal_id=meal.id,
            name=meal.name,
            price=to_decimal(meal.price),
            quantity=quantity,
            calories=int(meal.calories or 0),
            protein=to_decimal(meal.protein),
        )
        self.lines.append(line)
        return line

    def decrement(self, meal_id: UUID) -> None:
        line = self.find(meal_id)
        if line is None:
            return
        if line.quantity > 1:
            line.quantity -= 1
        else:
            self.lines.remove(line)

    def remove(self, meal_id: UUID) -> None:
        self.lines = [line for line in self.lines if line.meal_id != meal_id]

    def clear(self) -> None:
        self.lines = []

    def is_empty(self) -> bool:
        return not self.lines

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def subtotal(self) -> Decimal:
        return sum((line.line_total for line in self.lines), Decimal("0"))

    @property
    def total(self) -> Decimal:
        return self.subtotal + self.delivery_fee

    @property
    def total_calories(self) -> int:
        return sum(line.calories * line.quantity for line in self.lines)

    @property
    def total_protein(self) -> Decimal:
        return sum((line.protein * line.quantity for line in self.lines), Decimal("0"))

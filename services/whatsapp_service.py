"""
WhatsApp hand-off for orders.

Orders are confirmed over WhatsApp: the storefront opens a wa.me deep link
with a pre-filled, formatted summary of the order.
"""

from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional
from urllib.parse import quote

from app.config import settings


def _money(amount) -> str:
    return f"{settings.currency_symbol}{Decimal(str(amount)):.2f}"


def _number(value) -> str:
    """Render a quantity without trailing zeros (12.50 -> 12.5, 50.00 -> 50)."""
    d = Decimal(str(value)).normalize()
    if d == d.to_integral():
        return str(d.quantize(Decimal("1")))
    return format(d, "f")


class WhatsAppService:
    @staticmethod
    def build_order_message(
        name: str,
        phone: str,
        address: str,
        lines: Iterable,
        subtotal,
        delivery_fee,
        total,
        note: Optional[str] = None,
    ) -> str:
        """
        Format a cart order.

        Args:
            lines: objects with ``name``, ``quantity`` and ``line_total``
        """
        message = "*New Order from Honest Meals*\n\n"
        message += f"*Name:* {name}\n"
        message += f"*Phone:* {phone}\n"
        message += f"*Address:* {address}\n"

        message += "\n*Order Details:*\n"
        for index, line in enumerate(lines, start=1):
            message += f"{index}. {line.name} x {line.quantity} - {_money(line.line_total)}\n"

        message += f"\n*Subtotal:* {_money(subtotal)}\n"
        message += f"*Delivery Fee:* {_money(delivery_fee)}\n"
        message += f"*Total:* {_money(total)}\n"

        if note:
            message += f"\n*Note:* {note}\n"

        return message

    @staticmethod
    def build_custom_meal_message(
        name: str,
        phone: str,
        address: str,
        custom_meal,
        components: Iterable,
        delivery_fee,
        placed_at: Optional[datetime] = None,
    ) -> str:
        """
        Format a custom meal order.

        Args:
            custom_meal: object with name, description, nutrition totals,
                instructions and total_price
            components: objects with ``name``, ``quantity_grams`` and ``is_custom``
        """
        placed_at = placed_at or datetime.now()

        message = "*New Custom Meal Order from Honest Meals*\n\n"

        message += "*Customer Details:*\n"
        message += f"*Name:* {name}\n"
        message += f"*Phone:* {phone}\n"
        message += f"*Address:* {address}\n\n"

        message += "*Custom Meal Details:*\n"
        message += f"*Name:* {custom_meal.name}\n"
        if custom_meal.description:
            message += f"*Description:* {custom_meal.description}\n"

        message += f"*Calories:* {_number(custom_meal.calories)} kcal\n"
        message += f"*Protein:* {_number(custom_meal.protein)}g\n"
        message += f"*Carbs:* {_number(custom_meal.carbs)}g\n"
        message += f"*Fat:* {_number(custom_meal.fat)}g\n\n"

        message += "*Ingredients:*\n"
        for index, comp in enumerate(components, start=1):
            suffix = " (Custom)" if comp.is_custom else ""
            message += f"{index}. {comp.name} - {_number(comp.quantity_grams)}g{suffix}\n"

        if custom_meal.instructions:
            message += f"\n*Cooking Instructions:*\n{custom_meal.instructions}\n"

        total_price = Decimal(str(custom_meal.total_price))
        fee = Decimal(str(delivery_fee))
        message += f"\n*Total Price:* {_money(total_price)}\n"
        message += f"*Delivery Fee:* {_money(fee)}\n"
        message += f"*Grand Total:* {_money(total_price + fee)}\n"

        message += f"\n*Order Time:* {placed_at.strftime('%d/%m/%Y, %H:%M:%S')}\n"

        return message

    @staticmethod
    def order_link(message: str) -> str:
        """wa.me deep link carrying the URL-encoded message"""
        base = settings.whatsapp_base_url.rstrip("/")
        return f"{base}/{settings.whatsapp_number}?text={quote(message, safe='')}"

"""
Tests for the WhatsApp order hand-off messages and deep link.
"""

from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace
from urllib.parse import unquote

from services.whatsapp_service import WhatsAppService


def _line(name, quantity, line_total):
    return SimpleNamespace(name=name, quantity=quantity, line_total=Decimal(line_total))


def test_order_message_layout():
    message = WhatsAppService.build_order_message(
        name="Priya Sharma",
        phone="9876543210",
        address="12 MG Road, Pune",
        lines=[_line("Grilled Paneer Bowl", 2, "498"), _line("Chicken Wrap", 1, "199")],
        subtotal=Decimal("697"),
        delivery_fee=Decimal("40"),
        total=Decimal("737"),
        note="Ring the bell twice",
    )

    assert message.startswith("*New Order from Honest Meals*\n\n")
    assert "*Name:* Priya Sharma\n" in message
    assert "*Phone:* 9876543210\n" in message
    assert "*Address:* 12 MG Road, Pune\n" in message
    assert "1. Grilled Paneer Bowl x 2 - ₹498.00\n" in message
    assert "2. Chicken Wrap x 1 - ₹199.00\n" in message
    assert "*Subtotal:* ₹697.00\n" in message
    assert "*Delivery Fee:* ₹40.00\n" in message
    assert "*Total:* ₹737.00\n" in message
    assert message.endswith("*Note:* Ring the bell twice\n")


def test_order_message_without_note():
    message = WhatsAppService.build_order_message(
        name="A",
        phone="1",
        address="B",
        lines=[_line("Soup", 1, "99")],
        subtotal=Decimal("99"),
        delivery_fee=Decimal("40"),
        total=Decimal("139"),
    )
    assert "*Note:*" not in message


def test_custom_meal_message_layout():
    meal = SimpleNamespace(
        name="Post-Workout Bowl",
        description=None,
        calories=Decimal("315.00"),
        protein=Decimal("38.50"),
        carbs=Decimal("15.00"),
        fat=Decimal("11.10"),
        instructions="Less oil please",
        total_price=Decimal("72.00"),
    )
    components = [
        SimpleNamespace(name="Chicken Breast", quantity_grams=Decimal("100.00"), is_custom=False),
        SimpleNamespace(name="Mom's Chutney", quantity_grams=Decimal("12.50"), is_custom=True),
    ]

    message = WhatsAppService.build_custom_meal_message(
        name="Priya Sharma",
        phone="9876543210",
        address="12 MG Road, Pune",
        custom_meal=meal,
        components=components,
        delivery_fee=Decimal("40"),
        placed_at=datetime(2024, 3, 5, 18, 30, 0),
    )

    assert message.startswith("*New Custom Meal Order from Honest Meals*\n\n")
    assert "*Calories:* 315 kcal\n" in message
    assert "*Protein:* 38.5g\n" in message
    assert "*Fat:* 11.1g\n" in message
    assert "*Description:*" not in message
    assert "1. Chicken Breast - 100g\n" in message
    assert "2. Mom's Chutney - 12.5g (Custom)\n" in message
    assert "*Cooking Instructions:*\nLess oil please\n" in message
    assert "*Total Price:* ₹72.00\n" in message
    assert "*Grand Total:* ₹112.00\n" in message
    assert "*Order Time:* 05/03/2024, 18:30:00\n" in message


def test_order_link_encodes_message():
    link = WhatsAppService.order_link("*Total:* ₹737.00\nThanks & bye")

    assert link.startswith("https://wa.me/918888756746?text=")
    encoded = link.split("?text=", 1)[1]
    assert " " not in encoded
    assert "&" not in encoded
    assert unquote(encoded) == "*Total:* ₹737.00\nThanks & bye"

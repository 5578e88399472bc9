"""API routes package"""

from . import (
    admin,
    cart,
    catalog,
    custom_meals,
    favorites,
    health,
    ingredients,
    orders,
    profiles,
)

__all__ = [
    "admin",
    "cart",
    "catalog",
    "custom_meals",
    "favorites",
    "health",
    "ingredients",
    "orders",
    "profiles",
]

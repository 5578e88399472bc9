"""
Services package - Business logic layer.
"""

from services.admin_service import AdminService
from services.cart_service import CartService
from services.catalog_service import CatalogService
from services.custom_meal_service import CustomMealService
from services.favorite_service import FavoriteService
from services.ingredient_service import IngredientService
from services.order_service import OrderService, PlacedOrder
from services.profile_service import ProfileService
from services.storage_service import StorageService
from services.whatsapp_service import WhatsAppService
from services.notification_service import OrderEvent, OrderEventBus, order_events

__all__ = [
    "AdminService",
    "CartService",
    "CatalogService",
    "CustomMealService",
    "FavoriteService",
    "IngredientService",
    "OrderService",
    "PlacedOrder",
    "ProfileService",
    "StorageService",
    "WhatsAppService",
    "OrderEvent",
    "OrderEventBus",
    "order_events",
]

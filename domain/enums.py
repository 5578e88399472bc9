"""
Domain enums for Honest Meals.
Contains all enumeration types used across the domain models.
"""

import enum


class OrderStatus(str, enum.Enum):
    """Order lifecycle states shown in the admin panel"""

    PENDING = "pending"
    APPROVED = "approved"
    PREPARING = "preparing"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(str, enum.Enum):
    """Payment states of an order"""

    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"


class PaymentMethod(str, enum.Enum):
    """Accepted payment methods"""

    COD = "COD"
    UPI = "UPI"
    CARD = "card"


class UserRole(str, enum.Enum):
    """Profile roles"""

    CUSTOMER = "customer"
    ADMIN = "admin"


class CustomMealStatus(str, enum.Enum):
    """Review states of a saved custom meal"""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class CalorieRange(str, enum.Enum):
    """Catalog calorie buckets"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class MealSort(str, enum.Enum):
    """Catalog sort options"""

    DEFAULT = "default"
    NAME = "name"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    CALORIES_ASC = "calories_asc"
    PROTEIN_DESC = "protein_desc"

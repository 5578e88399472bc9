"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.catalog_schemas import (
    MealCategoryCreate,
    MealCategoryResponse,
    DietaryTypeCreate,
    DietaryTypeResponse,
    MealIngredientInput,
    MealIngredientResponse,
    MealCreate,
    MealUpdate,
    MealAvailabilityUpdate,
    MealResponse,
    MealDetailResponse,
    MealSearchFilters,
    NutritionResponse,
)
from domain.schemas.ingredient_schemas import (
    IngredientCategoryCreate,
    IngredientCategoryResponse,
    IngredientCreate,
    IngredientUpdate,
    IngredientResponse,
    CustomIngredientCreate,
    CustomIngredientResponse,
)
from domain.schemas.cart_schemas import (
    CartItemInput,
    CartQuoteRequest,
    CartLineResponse,
    CartQuoteResponse,
)
from domain.schemas.order_schemas import (
    CustomerDetails,
    OrderCreate,
    OrderStatusUpdate,
    OrderItemResponse,
    OrderResponse,
    OrderPlacedResponse,
)
from domain.schemas.profile_schemas import (
    ProfileUpdateRequest,
    ProfileResponse,
    RoleUpdateRequest,
    AdminUserResponse,
    FavoriteToggleResponse,
)
from domain.schemas.custom_meal_schemas import (
    CustomMealComponentInput,
    CustomMealPreviewRequest,
    CustomMealCreate,
    CustomMealComponentResponse,
    CustomMealPreviewResponse,
    CustomMealResponse,
    CustomMealOrderRequest,
)
from domain.schemas.admin_schemas import DashboardStats, DashboardResponse

__all__ = [
    # Catalog schemas
    "MealCategoryCreate",
    "MealCategoryResponse",
    "DietaryTypeCreate",
    "DietaryTypeResponse",
    "MealIngredientInput",
    "MealIngredientResponse",
    "MealCreate",
    "MealUpdate",
    "MealAvailabilityUpdate",
    "MealResponse",
    "MealDetailResponse",
    "MealSearchFilters",
    "NutritionResponse",
    # Ingredient schemas
    "IngredientCategoryCreate",
    "IngredientCategoryResponse",
    "IngredientCreate",
    "IngredientUpdate",
    "IngredientResponse",
    "CustomIngredientCreate",
    "CustomIngredientResponse",
    # Cart schemas
    "CartItemInput",
    "CartQuoteRequest",
    "CartLineResponse",
    "CartQuoteResponse",
    # Order schemas
    "CustomerDetails",
    "OrderCreate",
    "OrderStatusUpdate",
    "OrderItemResponse",
    "OrderResponse",
    "OrderPlacedResponse",
    # Profile schemas
    "ProfileUpdateRequest",
    "ProfileResponse",
    "RoleUpdateRequest",
    "AdminUserResponse",
    "FavoriteToggleResponse",
    # Custom meal schemas
    "CustomMealComponentInput",
    "CustomMealPreviewRequest",
    "CustomMealCreate",
    "CustomMealComponentResponse",
    "CustomMealPreviewResponse",
    "CustomMealResponse",
    "CustomMealOrderRequest",
    # Admin schemas
    "DashboardStats",
    "DashboardResponse",
]

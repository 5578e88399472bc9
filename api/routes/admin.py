"""Back-office routes; every endpoint requires the admin role"""

import asyncio
from fastapi import APIRouter, Depends, File, Query, Request, UploadFile, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List, Optional

from api.dependencies import get_db, require_admin
from api.responses import DeletedResponse
from domain.enums import OrderStatus
from domain.mappers import MealMapper
from domain.schemas.admin_schemas import DashboardResponse
from domain.schemas.catalog_schemas import (
    DietaryTypeCreate,
    DietaryTypeResponse,
    MealAvailabilityUpdate,
    MealCategoryCreate,
    MealCategoryResponse,
    MealCreate,
    MealDetailResponse,
    MealResponse,
    MealUpdate,
)
from domain.schemas.ingredient_schemas import (
    IngredientCategoryCreate,
    IngredientCategoryResponse,
    IngredientCreate,
    IngredientResponse,
    IngredientUpdate,
)
from domain.schemas.order_schemas import OrderResponse, OrderStatusUpdate
from domain.schemas.profile_schemas import (
    AdminUserResponse,
    ProfileResponse,
    RoleUpdateRequest,
)
from services.admin_service import AdminService
from services.catalog_service import CatalogService
from services.ingredient_service import IngredientService
from services.notification_service import order_events
from services.order_service import OrderService
from services.profile_service import ProfileService
from app.config import settings
from app.exceptions import NotFoundError

router = APIRouter(
    prefix="/admin", tags=["Admin"], dependencies=[Depends(require_admin)]
)
logger = logging.getLogger("honestmeals.api.admin")

KEEPALIVE_SECONDS = 15.0


@router.get("/dashboard", response_model=DashboardResponse)
def dashboard(db: Session = Depends(get_db)):
    """Order, user and meal counts, revenue and the latest orders"""
    return DashboardResponse(
        stats=AdminService.dashboard_stats(db),
        recent_orders=[
            OrderResponse.model_validate(o) for o in AdminService.recent_orders(db)
        ],
    )


# ----------------------------------------------------------------------------
# Meals
# ----------------------------------------------------------------------------


@router.get("/meals", response_model=List[MealResponse])
def list_meals(db: Session = Depends(get_db)):
    """Every meal, available or not, ordered by name"""
    return [MealMapper.to_response(m) for m in CatalogService.list_meals(db)]


@router.post(
    "/meals", response_model=MealDetailResponse, status_code=status.HTTP_201_CREATED
)
def create_meal(payload: MealCreate, db: Session = Depends(get_db)):
    meal = CatalogService.create_meal(db, payload)
    return MealMapper.to_detail(CatalogService.get_meal(db, meal.id))


@router.patch("/meals/{meal_id}", response_model=MealDetailResponse)
def update_meal(meal_id: UUID, payload: MealUpdate, db: Session = Depends(get_db)):
    """Partial update; an ingredient list replaces the stored one"""
    CatalogService.update_meal(db, meal_id, payload)
    return MealMapper.to_detail(CatalogService.get_meal(db, meal_id))


@router.patch("/meals/{meal_id}/availability", response_model=MealResponse)
def set_meal_availability(
    meal_id: UUID, payload: MealAvailabilityUpdate, db: Session = Depends(get_db)
):
    meal = CatalogService.set_availability(db, meal_id, payload.is_available)
    return MealMapper.to_response(meal)


@router.delete("/meals/{meal_id}", response_model=DeletedResponse)
def delete_meal(meal_id: UUID, db: Session = Depends(get_db)):
    if not CatalogService.delete_meal(db, meal_id):
        raise NotFoundError(f"Meal {meal_id} not found")
    return DeletedResponse(deleted=str(meal_id))


@router.post("/meals/{meal_id}/image", response_model=MealResponse)
def upload_meal_image(
    meal_id: UUID, file: UploadFile = File(...), db: Session = Depends(get_db)
):
    """Store a meal photo (images only, 5MB at most) and link it to the meal"""
    # one byte past the limit is enough to reject an oversized upload
    content = file.file.read(settings.max_image_bytes + 1)
    meal = CatalogService.upload_meal_image(db, meal_id, content, file.content_type)
    return MealMapper.to_response(meal)


# ----------------------------------------------------------------------------
# Categories and dietary types
# ----------------------------------------------------------------------------


@router.post(
    "/categories",
    response_model=MealCategoryResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_category(payload: MealCategoryCreate, db: Session = Depends(get_db)):
    return MealCategoryResponse.model_validate(CatalogService.create_category(db, payload))


@router.put("/categories/{category_id}", response_model=MealCategoryResponse)
def update_category(
    category_id: UUID, payload: MealCategoryCreate, db: Session = Depends(get_db)
):
    category = CatalogService.update_category(db, category_id, payload)
    return MealCategoryResponse.model_validate(category)


@router.delete("/categories/{category_id}", response_model=DeletedResponse)
def delete_category(category_id: UUID, db: Session = Depends(get_db)):
    if not CatalogService.delete_category(db, category_id):
        raise NotFoundError(f"Category {category_id} not found")
    return DeletedResponse(deleted=str(category_id))


@router.post(
    "/dietary-types",
    response_model=DietaryTypeResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_dietary_type(payload: DietaryTypeCreate, db: Session = Depends(get_db)):
    return DietaryTypeResponse.model_validate(
        CatalogService.create_dietary_type(db, payload)
    )


@router.put("/dietary-types/{dietary_type_id}", response_model=DietaryTypeResponse)
def update_dietary_type(
    dietary_type_id: UUID, payload: DietaryTypeCreate, db: Session = Depends(get_db)
):
    return DietaryTypeResponse.model_validate(
        CatalogService.update_dietary_type(db, dietary_type_id, payload)
    )


@router.delete("/dietary-types/{dietary_type_id}", response_model=DeletedResponse)
def delete_dietary_type(dietary_type_id: UUID, db: Session = Depends(get_db)):
    if not CatalogService.delete_dietary_type(db, dietary_type_id):
        raise NotFoundError(f"Dietary type {dietary_type_id} not found")
    return DeletedResponse(deleted=str(dietary_type_id))


# ----------------------------------------------------------------------------
# Ingredients
# ----------------------------------------------------------------------------


@router.post(
    "/ingredients",
    response_model=IngredientResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_ingredient(payload: IngredientCreate, db: Session = Depends(get_db)):
    return IngredientResponse.model_validate(IngredientService.create(db, payload))


@router.patch("/ingredients/{ingredient_id}", response_model=IngredientResponse)
def update_ingredient(
    ingredient_id: UUID, payload: IngredientUpdate, db: Session = Depends(get_db)
):
    return IngredientResponse.model_validate(
        IngredientService.update(db, ingredient_id, payload)
    )


@router.delete("/ingredients/{ingredient_id}", response_model=DeletedResponse)
def delete_ingredient(ingredient_id: UUID, db: Session = Depends(get_db)):
    """Refused with 409 while any meal still uses the ingredient"""
    if not IngredientService.delete(db, ingredient_id):
        raise NotFoundError(f"Ingredient {ingredient_id} not found")
    return DeletedResponse(deleted=str(ingredient_id))


@router.post(
    "/ingredient-categories",
    response_model=IngredientCategoryResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_ingredient_category(
    payload: IngredientCategoryCreate, db: Session = Depends(get_db)
):
    return IngredientCategoryResponse.model_validate(
        IngredientService.create_category(db, payload)
    )


# ----------------------------------------------------------------------------
# Orders
# ----------------------------------------------------------------------------


@router.get("/orders/events")
async def order_event_stream(request: Request):
    """
    Server-Sent Events stream of order_created and order_status_changed.

    Clients refetch their order list when an event arrives. A comment line
    is sent periodically to keep idle connections open. The stream ends when
    the client disconnects or the server shuts down.
    """
    queue = order_events.subscribe()

    async def events():
        try:
            while not await request.is_disconnected():
                try:
                    event = await asyncio.wait_for(queue.get(), KEEPALIVE_SECONDS)
                except asyncio.TimeoutError:
                    yield ": keepalive\n\n"
                    continue
                if event is None:
                    break
                yield event.to_sse()
        finally:
            order_events.unsubscribe(queue)

    return StreamingResponse(
        events(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )


@router.get("/orders", response_model=List[OrderResponse])
def list_orders(
    search: Optional[str] = Query(None, description="Order id, name, phone or address"),
    status_filter: Optional[OrderStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
):
    orders = OrderService.list_orders(db, search, status_filter)
    return [OrderResponse.model_validate(o) for o in orders]


@router.get("/orders/{order_id}", response_model=OrderResponse)
def get_order(order_id: UUID, db: Session = Depends(get_db)):
    return OrderResponse.model_validate(OrderService.get_order(db, order_id))


@router.patch("/orders/{order_id}/status", response_model=OrderResponse)
def update_order_status(
    order_id: UUID, payload: OrderStatusUpdate, db: Session = Depends(get_db)
):
    order = OrderService.update_status(db, order_id, payload.status, payload.note)
    return OrderResponse.model_validate(order)


# ----------------------------------------------------------------------------
# Users
# ----------------------------------------------------------------------------


@router.get("/users", response_model=List[AdminUserResponse])
def list_users(db: Session = Depends(get_db)):
    """Profiles with the number of orders each placed"""
    return [
        AdminUserResponse(
            **ProfileResponse.model_validate(profile).model_dump(), order_count=count
        )
        for profile, count in ProfileService.list_users(db)
    ]


@router.put("/users/{user_id}/role", response_model=AdminUserResponse)
def set_user_role(
    user_id: UUID, payload: RoleUpdateRequest, db: Session = Depends(get_db)
):
    profile = ProfileService.set_role(db, user_id, payload.role)
    return AdminUserResponse(
        **ProfileResponse.model_validate(profile).model_dump(),
        order_count=ProfileService.order_count(db, user_id),
    )

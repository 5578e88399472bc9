from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import logging

from domain.models import Meal, MealCategory, DietaryType, MealIngredient
from domain.nutrition import meal_nutrition
from domain.schemas.catalog_schemas import (
    MealCategoryCreate,
    DietaryTypeCreate,
    MealCreate,
    MealUpdate,
    MealIngredientInput,
    MealSearchFilters,
)
from repositories import (
    MealRepository,
    MealCategoryRepository,
    DietaryTypeRepository,
    IngredientRepository,
)
from services.storage_service import StorageService
from app.exceptions import ConflictError, NotFoundError, ServiceValidationError

logger = logging.getLogger("honestmeals.catalog")

NUTRITION_FIELDS = ("calories", "protein", "carbs", "fat")


class CatalogService:
    """Business logic for the menu catalog"""

    # ------------------------------------------------------------------
    # Categories and dietary types
    # ------------------------------------------------------------------

    @staticmethod
    def list_categories(db: Session) -> List[MealCategory]:
        return MealCategoryRepository(db).list_ordered()

    @staticmethod
    def create_category(db: Session, data: MealCategoryCreate) -> MealCategory:
        repo = MealCategoryRepository(db)
        if repo.get_by_name(data.name):
            raise ConflictError(f"Category '{data.name}' already exists")
        category = repo.create(MealCategory(**data.model_dump()))
        logger.info(f"category_created id={category.id} name={category.name}")
        return category

    @staticmethod
    def update_category(
        db: Session, category_id: UUID, data: MealCategoryCreate
    ) -> MealCategory:
        repo = MealCategoryRepository(db)
        category = repo.get_by_id(category_id)
        if not category:
            raise NotFoundError(f"Category {category_id} not found")
        existing = repo.get_by_name(data.name)
        if existing and existing.id != category_id:
            raise ConflictError(f"Category '{data.name}' already exists")
        for key, value in data.model_dump().items():
            setattr(category, key, value)
        return repo.update(category)

    @staticmethod
    def delete_category(db: Session, category_id: UUID) -> bool:
        meal_repo = MealRepository(db)
        in_use = meal_repo.count_by_category(category_id)
        if in_use:
            raise ConflictError(
                f"Cannot delete: This category has {in_use} meals",
                details={"meal_count": in_use},
            )
        return MealCategoryRepository(db).delete(category_id)

    @staticmethod
    def list_dietary_types(db: Session) -> List[DietaryType]:
        return DietaryTypeRepository(db).list_ordered()

    @staticmethod
    def create_dietary_type(db: Session, data: DietaryTypeCreate) -> DietaryType:
        repo = DietaryTypeRepository(db)
        if repo.get_by_name(data.name):
            raise ConflictError(f"Dietary type '{data.name}' already exists")
        dietary_type = repo.create(DietaryType(name=data.name))
        logger.info(f"dietary_type_created id={dietary_type.id} name={dietary_type.name}")
        return dietary_type

    @staticmethod
    def update_dietary_type(
        db: Session, dietary_type_id: UUID, data: DietaryTypeCreate
    ) -> DietaryType:
        repo = DietaryTypeRepository(db)
        dietary_type = repo.get_by_id(dietary_type_id)
        if not dietary_type:
            raise NotFoundError(f"Dietary type {dietary_type_id} not found")
        existing = repo.get_by_name(data.name)
        if existing and existing.id != dietary_type_id:
            raise ConflictError(f"Dietary type '{data.name}' already exists")
        dietary_type.name = data.name
        dietary_type = repo.update(dietary_type)
        logger.info(f"dietary_type_updated id={dietary_type_id} name={data.name}")
        return dietary_type

    @staticmethod
    def delete_dietary_type(db: Session, dietary_type_id: UUID) -> bool:
        repo = DietaryTypeRepository(db)
        dietary_type = repo.get_by_id(dietary_type_id)
        if not dietary_type:
            return False
        for meal in dietary_type.meals:
            meal.dietary_type_id = None
        db.delete(dietary_type)
        db.commit()
        return True

    # ------------------------------------------------------------------
    # Meals
    # ------------------------------------------------------------------

    @staticmethod
    def list_meals(db: Session) -> List[Meal]:
        return MealRepository(db).list_ordered()

    @staticmethod
    def search_meals(db: Session, filters: MealSearchFilters) -> List[Meal]:
        meals = MealRepository(db).search(filters)
        logger.debug(
            f"meals_searched count={len(meals)} search={filters.search!r} "
            f"sort={filters.sort.value}"
        )
        return meals

    @staticmethod
    def get_meal(db: Session, meal_id: UUID) -> Meal:
        meal = MealRepository(db).get_with_ingredients(meal_id)
        if not meal:
            raise NotFoundError(f"Meal {meal_id} not found")
        return meal

    @staticmethod
    def _validate_references(
        db: Session,
        category_id: Optional[UUID],
        dietary_type_id: Optional[UUID],
    ) -> None:
        if category_id and not MealCategoryRepository(db).exists(category_id):
            raise ServiceValidationError(f"Unknown category {category_id}")
        if dietary_type_id and not DietaryTypeRepository(db).exists(dietary_type_id):
            raise ServiceValidationError(f"Unknown dietary type {dietary_type_id}")

    @staticmethod
    def _build_ingredients(
        db: Session, items: List[MealIngredientInput]
    ) -> List[MealIngredient]:
        """Resolve ingredient ids, failing on the first unknown one."""
        ids = [it.ingredient_id for it in items]
        found = {i.id: i for i in IngredientRepository(db).get_many(ids)}
        missing = [str(i) for i in ids if i not in found]
        if missing:
            raise ServiceValidationError(
                "Unknown ingredients", details={"ingredient_ids": missing}
            )
        return [
            MealIngredient(
                ingredient_id=it.ingredient_id,
                ingredient=found[it.ingredient_id],
                quantity_grams=it.quantity_grams,
            )
            for it in items
        ]

    @staticmethod
    def compute_nutrition(rows: List[MealIngredient]) -> dict:
        """Calories and macros of a meal from its ingredient portions"""
        return meal_nutrition((row.ingredient, row.quantity_grams) for row in rows)

    @staticmethod
    def create_meal(db: Session, data: MealCreate) -> Meal:
        """
        Create a catalog meal with its ingredient composition.

        When ``calculate_nutrition`` is set, the submitted calories and macros
        are replaced by the totals derived from the ingredients.

        Raises:
            ServiceValidationError: unknown category, dietary type or ingredient,
                or nutrition requested without ingredients
        """
        CatalogService._validate_references(db, data.category_id, data.dietary_type_id)

        fields = data.model_dump(exclude={"ingredients", "calculate_nutrition"})
        meal = Meal(**fields)
        rows = CatalogService._build_ingredients(db, data.ingredients)

        if data.calculate_nutrition:
            if not rows:
                raise ServiceValidationError(
                    "Please add at least one ingredient to calculate nutrition"
                )
            fields_from_ingredients = CatalogService.compute_nutrition(rows)
            for key in NUTRITION_FIELDS:
                setattr(meal, key, fields_from_ingredients[key])

        meal.ingredients = rows
        try:
            db.add(meal)
            db.commit()
            db.refresh(meal)
        except IntegrityError as e:
            db.rollback()
            logger.warning(f"meal_create_conflict name={data.name}: {e.orig}")
            raise ConflictError(f"Could not create meal '{data.name}'") from e

        logger.info(
            f"meal_created id={meal.id} name={meal.name} ingredients={len(rows)}"
        )
        return meal

    @staticmethod
    def update_meal(db: Session, meal_id: UUID, data: MealUpdate) -> Meal:
        """
        Partially update a meal. A provided ingredient list replaces the
        stored composition entirely.
        """
        meal = CatalogService.get_meal(db, meal_id)
        changes = data.model_dump(
            exclude_unset=True, exclude={"ingredients", "calculate_nutrition"}
        )
        CatalogService._validate_references(
            db, changes.get("category_id"), changes.get("dietary_type_id")
        )

        for key, value in changes.items():
            setattr(meal, key, value)

        try:
            if data.ingredients is not None:
                rows = CatalogService._build_ingredients(db, data.ingredients)
                meal.ingredients.clear()
                db.flush()
                meal.ingredients.extend(rows)

            if data.calculate_nutrition:
                if not meal.ingredients:
                    raise ServiceValidationError(
                        "Please add at least one ingredient to calculate nutrition"
                    )
                computed = CatalogService.compute_nutrition(meal.ingredients)
                for key in NUTRITION_FIELDS:
                    setattr(meal, key, computed[key])

            db.commit()
            db.refresh(meal)
        except ServiceValidationError:
            db.rollback()
            raise
        except Exception:
            db.rollback()
            logger.exception("Error updating meal %s", meal_id)
            raise

        logger.info(f"meal_updated id={meal_id} fields={sorted(changes)}")
        return meal

    @staticmethod
    def set_availability(db: Session, meal_id: UUID, is_available: bool) -> Meal:
        repo = MealRepository(db)
        meal = repo.get_by_id(meal_id)
        if not meal:
            raise NotFoundError(f"Meal {meal_id} not found")
        meal.is_available = is_available
        meal = repo.update(meal)
        logger.info(f"meal_availability_changed id={meal_id} available={is_available}")
        return meal

    @staticmethod
    def delete_meal(db: Session, meal_id: UUID) -> bool:
        """Delete a meal and its ingredient rows"""
        meal = MealRepository(db).get_with_ingredients(meal_id)
        if not meal:
            return False
        image_url = meal.image_url
        try:
            meal.ingredients.clear()
            db.flush()
            db.delete(meal)
            db.commit()
        except Exception:
            db.rollback()
            logger.exception("Error deleting meal %s", meal_id)
            raise
        if image_url:
            StorageService.delete_by_url(image_url)
        logger.info(f"meal_deleted id={meal_id}")
        return True

    @staticmethod
    def upload_meal_image(
        db: Session, meal_id: UUID, content: bytes, content_type: str
    ) -> Meal:
        repo = MealRepository(db)
        meal = repo.get_by_id(meal_id)
        if not meal:
            raise NotFoundError(f"Meal {meal_id} not found")
        previous = meal.image_url
        meal.image_url = StorageService.save_meal_image(meal_id, content, content_type)
        meal = repo.update(meal)
        if previous and previous != meal.image_url:
            StorageService.delete_by_url(previous)
        return meal

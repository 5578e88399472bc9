from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import logging

from domain.models import Ingredient, IngredientCategory, UserCustomIngredient
from domain.schemas.ingredient_schemas import (
    IngredientCategoryCreate,
    IngredientCreate,
    IngredientUpdate,
    CustomIngredientCreate,
)
from repositories import (
    IngredientRepository,
    IngredientCategoryRepository,
    CustomIngredientRepository,
    ProfileRepository,
)
from app.exceptions import ConflictError, NotFoundError, ServiceValidationError

logger = logging.getLogger("honestmeals.ingredients")


class IngredientService:
    """Business logic for the master ingredient table and customer ingredients"""

    @staticmethod
    def list_categories(db: Session) -> List[IngredientCategory]:
        return IngredientCategoryRepository(db).list_ordered()

    @staticmethod
    def create_category(
        db: Session, data: IngredientCategoryCreate
    ) -> IngredientCategory:
        repo = IngredientCategoryRepository(db)
        try:
            return repo.create(IngredientCategory(**data.model_dump()))
        except IntegrityError as e:
            db.rollback()
            raise ConflictError(
                f"Ingredient category '{data.name}' already exists"
            ) from e

    @staticmethod
    def search(
        db: Session, search: Optional[str] = None, category_id: Optional[UUID] = None
    ) -> List[Ingredient]:
        return IngredientRepository(db).search(search, category_id)

    @staticmethod
    def get(db: Session, ingredient_id: UUID) -> Ingredient:
        ingredient = IngredientRepository(db).get_by_id(ingredient_id)
        if not ingredient:
            raise NotFoundError(f"Ingredient {ingredient_id} not found")
        return ingredient

    @staticmethod
    def _check_category(db: Session, category_id: Optional[UUID]) -> None:
        if category_id and not IngredientCategoryRepository(db).exists(category_id):
            raise ServiceValidationError(f"Unknown ingredient category {category_id}")

    @staticmethod
    def create(db: Session, data: IngredientCreate) -> Ingredient:
        """
        Add an ingredient to the master table.

        Raises:
            ConflictError: an ingredient with the same name (case-insensitive) exists
        """
        repo = IngredientRepository(db)
        name = data.name.strip()
        if repo.get_by_name(name):
            raise ConflictError(f"Ingredient '{name}' already exists")
        IngredientService._check_category(db, data.category_id)

        fields = data.model_dump()
        fields["name"] = name
        try:
            ingredient = repo.create(Ingredient(**fields))
        except IntegrityError as e:
            # concurrent insert of the same name
            db.rollback()
            raise ConflictError(f"Ingredient '{name}' already exists") from e

        logger.info(f"ingredient_created id={ingredient.id} name={ingredient.name}")
        return ingredient

    @staticmethod
    def update(db: Session, ingredient_id: UUID, data: IngredientUpdate) -> Ingredient:
        repo = IngredientRepository(db)
        ingredient = IngredientService.get(db, ingredient_id)
        changes = data.model_dump(exclude_unset=True)

        if "name" in changes and changes["name"] is not None:
            changes["name"] = changes["name"].strip()
            existing = repo.get_by_name(changes["name"])
            if existing and existing.id != ingredient_id:
                raise ConflictError(f"Ingredient '{changes['name']}' already exists")
        IngredientService._check_category(db, changes.get("category_id"))

        for key, value in changes.items():
            setattr(ingredient, key, value)
        try:
            ingredient = repo.update(ingredient)
        except IntegrityError as e:
            db.rollback()
            raise ConflictError(f"Could not update ingredient {ingredient_id}") from e

        logger.info(f"ingredient_updated id={ingredient_id} fields={sorted(changes)}")
        return ingredient

    @staticmethod
    def delete(db: Session, ingredient_id: UUID) -> bool:
        """
        Delete an ingredient that no catalog meal uses.

        Raises:
            ConflictError: the ingredient is part of at least one meal
        """
        repo = IngredientRepository(db)
        if not repo.exists(ingredient_id):
            return False
        usages = repo.count_meal_usages(ingredient_id)
        if usages:
            raise ConflictError(
                f"Cannot delete: This ingredient is used in {usages} meals",
                details={"meal_count": usages},
            )
        deleted = repo.delete(ingredient_id)
        logger.info(f"ingredient_deleted id={ingredient_id}")
        return deleted

    # ------------------------------------------------------------------
    # Customer-defined ingredients
    # ------------------------------------------------------------------

    @staticmethod
    def list_custom(db: Session, user_id: UUID) -> List[UserCustomIngredient]:
        return CustomIngredientRepository(db).get_by_customer(user_id)

    @staticmethod
    def create_custom(
        db: Session, user_id: UUID, data: CustomIngredientCreate
    ) -> UserCustomIngredient:
        if not ProfileRepository(db).exists(user_id):
            raise NotFoundError(f"User {user_id} not found")
        ingredient = CustomIngredientRepository(db).create(
            UserCustomIngredient(customer_id=user_id, **data.model_dump())
        )
        logger.info(f"custom_ingredient_created id={ingredient.id} user_id={user_id}")
        return ingredient

    @staticmethod
    def delete_custom(db: Session, user_id: UUID, ingredient_id: UUID) -> bool:
        repo = CustomIngredientRepository(db)
        ingredient = repo.get_owned(ingredient_id, user_id)
        if not ingredient:
            return False
        db.delete(ingredient)
        db.commit()
        logger.info(f"custom_ingredient_deleted id={ingredient_id} user_id={user_id}")
        return True

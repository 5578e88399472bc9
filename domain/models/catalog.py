"""
Menu catalog models.
"""

from sqlalchemy import (
    Column,
    Text,
    Boolean,
    Integer,
    Numeric,
    DateTime,
    ForeignKey,
    Uuid,
    CheckConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base


class MealCategory(Base):
    """Menu section (breakfast bowls, wraps, ...)"""

    __tablename__ = "meal_categories"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False, unique=True)
    description = Column(Text)
    display_order = Column(Integer, nullable=False, default=0)

    meals = relationship("Meal", back_populates="category")


class DietaryType(Base):
    """Dietary grouping such as "soups" or "healthy-drinks" """

    __tablename__ = "dietary_types"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False, unique=True)

    meals = relationship("Meal", back_populates="dietary_type")


class Meal(Base):
    """Menu item with price and nutrition per serving"""

    __tablename__ = "meals"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False, index=True)
    description = Column(Text)
    price = Column(Numeric(10, 2), nullable=False)
    calories = Column(Integer, nullable=False, default=0)
    protein = Column(Numeric(8, 2), nullable=False, default=0)
    carbs = Column(Numeric(8, 2), nullable=False, default=0)
    fat = Column(Numeric(8, 2), nullable=False, default=0)
    fiber = Column(Numeric(8, 2))
    image_url = Column(Text)
    category_id = Column(
        Uuid, ForeignKey("meal_categories.id", ondelete="RESTRICT"), nullable=False
    )
    dietary_type_id = Column(
        Uuid, ForeignKey("dietary_types.id", ondelete="SET NULL")
    )
    food_type = Column(Boolean)  # True = vegetarian
    is_available = Column(Boolean, nullable=False, default=True)
    spice_level = Column(Integer)
    cooking_time_minutes = Column(Integer)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    category = relationship("MealCategory", back_populates="meals")
    dietary_type = relationship("DietaryType", back_populates="meals")
    ingredients = relationship(
        "MealIngredient", back_populates="meal", cascade="all, delete-orphan"
    )

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_meal_price_nonneg"),
        CheckConstraint("calories >= 0", name="ck_meal_calories_nonneg"),
        CheckConstraint(
            "spice_level IS NULL OR (spice_level >= 0 AND spice_level <= 5)",
            name="ck_meal_spice_level_range",
        ),
    )


class MealIngredient(Base):
    """Quantity of an ingredient in a catalog meal"""

    __tablename__ = "meal_ingredients"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    meal_id = Column(Uuid, ForeignKey("meals.id", ondelete="CASCADE"), nullable=False)
    ingredient_id = Column(
        Uuid, ForeignKey("ingredients.id", ondelete="RESTRICT"), nullable=False
    )
    quantity_grams = Column(Numeric(8, 2), nullable=False)

    meal = relationship("Meal", back_populates="ingredients")
    ingredient = relationship("Ingredient")

    __table_args__ = (
        CheckConstraint("quantity_grams > 0", name="ck_meal_ingredient_qty_pos"),
    )

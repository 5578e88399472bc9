"""
Ingredient models - Master ingredient table and customer-defined ingredients.
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
    UniqueConstraint,
    CheckConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base


class IngredientCategory(Base):
    """Grouping shown in the custom meal builder (grains, proteins, ...)"""

    __tablename__ = "ingredient_categories"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False, unique=True)
    description = Column(Text)
    display_order = Column(Integer, nullable=False, default=0)

    ingredients = relationship("Ingredient", back_populates="category")


class Ingredient(Base):
    """
    Master ingredient table.

    Catalog meals and custom meal components reference ingredients by id;
    nutrition and price are expressed per 100 grams.
    """

    __tablename__ = "ingredients"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False, index=True)
    description = Column(Text)
    calories_per_100g = Column(Numeric(8, 2), nullable=False, default=0)
    protein_per_100g = Column(Numeric(8, 2), nullable=False, default=0)
    carbs_per_100g = Column(Numeric(8, 2), nullable=False, default=0)
    fat_per_100g = Column(Numeric(8, 2), nullable=False, default=0)
    price_per_100g = Column(Numeric(10, 2), nullable=False, default=0)
    is_allergen = Column(Boolean, nullable=False, default=False)
    category_id = Column(
        Uuid, ForeignKey("ingredient_categories.id", ondelete="SET NULL")
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    category = relationship("IngredientCategory", back_populates="ingredients")

    __table_args__ = (
        UniqueConstraint("name", name="uq_ingredient_name"),
        CheckConstraint("calories_per_100g >= 0", name="ck_ingredient_kcal_nonneg"),
        CheckConstraint("price_per_100g >= 0", name="ck_ingredient_price_nonneg"),
    )

    @property
    def category_name(self):
        return self.category.name if self.category else None

    def __repr__(self):
        return f"<Ingredient(id={self.id}, name='{self.name}')>"


class UserCustomIngredient(Base):
    """Ingredient defined by a customer for their own custom meals"""

    __tablename__ = "user_custom_ingredients"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    customer_id = Column(
        Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    name = Column(Text, nullable=False)
    description = Column(Text)
    calories_per_100g = Column(Numeric(8, 2), nullable=False, default=0)
    protein_per_100g = Column(Numeric(8, 2), nullable=False, default=0)
    carbs_per_100g = Column(Numeric(8, 2), nullable=False, default=0)
    fat_per_100g = Column(Numeric(8, 2), nullable=False, default=0)
    price_per_100g = Column(Numeric(10, 2), nullable=False, default=0)
    is_private = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    customer = relationship("Profile", back_populates="custom_ingredients")

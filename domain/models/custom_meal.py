"""
Custom meal models - meals assembled by customers from ingredients.
"""

from sqlalchemy import (
    Column,
    Text,
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
from domain.models.types import enum_column_type, utcnow
from domain.enums import CustomMealStatus


class CustomMeal(Base):
    """Customer-assembled meal with totals computed from its components"""

    __tablename__ = "custom_meals"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    customer_id = Column(
        Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    name = Column(Text, nullable=False)
    description = Column(Text)
    base_price = Column(Numeric(10, 2), nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)
    calories = Column(Numeric(10, 2), nullable=False, default=0)
    protein = Column(Numeric(10, 2), nullable=False, default=0)
    carbs = Column(Numeric(10, 2), nullable=False, default=0)
    fat = Column(Numeric(10, 2), nullable=False, default=0)
    dietary_type_id = Column(
        Uuid, ForeignKey("dietary_types.id", ondelete="SET NULL")
    )
    instructions = Column(Text)
    status = Column(
        enum_column_type(CustomMealStatus, "custom_meal_status"),
        nullable=False,
        default=CustomMealStatus.PENDING,
    )
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())

    customer = relationship("Profile", back_populates="custom_meals")
    components = relationship(
        "CustomMealComponent",
        back_populates="custom_meal",
        cascade="all, delete-orphan",
    )


class CustomMealComponent(Base):
    """Ingredient portion inside a custom meal"""

    __tablename__ = "custom_meal_components"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    custom_meal_id = Column(
        Uuid, ForeignKey("custom_meals.id", ondelete="CASCADE"), nullable=False
    )
    ingredient_id = Column(Uuid, ForeignKey("ingredients.id", ondelete="SET NULL"))
    custom_ingredient_id = Column(
        Uuid, ForeignKey("user_custom_ingredients.id", ondelete="SET NULL")
    )
    quantity_grams = Column(Numeric(8, 2), nullable=False)
    price_contribution = Column(Numeric(10, 2), nullable=False, default=0)

    custom_meal = relationship("CustomMeal", back_populates="components")
    ingredient = relationship("Ingredient")
    custom_ingredient = relationship("UserCustomIngredient")

    __table_args__ = (
        CheckConstraint("quantity_grams > 0", name="ck_component_qty_pos"),
    )

    @property
    def is_custom(self) -> bool:
        return self.custom_ingredient_id is not None

    @property
    def name(self):
        source = self.custom_ingredient if self.is_custom else self.ingredient
        return source.name if source is not None else None

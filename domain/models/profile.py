"""
Customer-related database models.
"""

from sqlalchemy import (
    Column,
    Text,
    DateTime,
    ForeignKey,
    Uuid,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base
from domain.models.types import enum_column_type, utcnow
from domain.enums import UserRole


class Profile(Base):
    """Customer or staff profile, keyed by the identity provider's user id"""

    __tablename__ = "profiles"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    full_name = Column(Text)
    email = Column(Text, unique=True)
    phone_number = Column(Text)
    address = Column(Text)
    role = Column(
        enum_column_type(UserRole, "user_role"),
        nullable=False,
        default=UserRole.CUSTOMER,
    )
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    orders = relationship("Order", back_populates="customer")
    favorites = relationship(
        "Favorite", back_populates="user", cascade="all, delete-orphan"
    )
    custom_meals = relationship(
        "CustomMeal", back_populates="customer", cascade="all, delete-orphan"
    )
    custom_ingredients = relationship(
        "UserCustomIngredient", back_populates="customer", cascade="all, delete-orphan"
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class GuestCustomer(Base):
    """Contact details captured for checkouts without a signed-in profile"""

    __tablename__ = "guest_customers"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    full_name = Column(Text, nullable=False)
    phone_number = Column(Text, nullable=False)
    address = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())

    orders = relationship("Order", back_populates="guest_customer")


class Favorite(Base):
    """Meals a customer has marked as favorite"""

    __tablename__ = "favorites"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    meal_id = Column(Uuid, ForeignKey("meals.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())

    user = relationship("Profile", back_populates="favorites")
    meal = relationship("Meal")

    __table_args__ = (
        UniqueConstraint("user_id", "meal_id", name="uq_favorite_user_meal"),
    )

from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime
from uuid import UUID

from domain.enums import UserRole


class ProfileUpdateRequest(BaseModel):
    full_name: Optional[str] = Field(default=None, max_length=200)
    email: Optional[EmailStr] = None
    phone_number: Optional[str] = Field(default=None, max_length=30)
    address: Optional[str] = Field(default=None, max_length=1000)


class ProfileResponse(BaseModel):
    id: UUID
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None
    role: UserRole
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class RoleUpdateRequest(BaseModel):
    role: UserRole


class AdminUserResponse(ProfileResponse):
    order_count: int = 0


class FavoriteToggleResponse(BaseModel):
    meal_id: UUID
    is_favorite: bool

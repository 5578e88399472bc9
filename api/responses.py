"""
Shared API response models.
"""

from typing import Optional
from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response"""

    status: str = Field(..., description="Service status")
    service: str = Field(..., description="Service name")
    version: Optional[str] = Field(None, description="Service version")
    database: Optional[str] = Field(None, description="Database check result")


class DeletedResponse(BaseModel):
    status: str = "ok"
    deleted: str

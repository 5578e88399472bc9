"""Profile of the signed-in customer"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID

from api.dependencies import get_db, get_current_user_id
from domain.schemas.profile_schemas import ProfileResponse, ProfileUpdateRequest
from services.profile_service import ProfileService
from app.exceptions import NotFoundError

router = APIRouter(prefix="/me", tags=["Profiles"])
logger = logging.getLogger("honestmeals.api.profiles")


@router.get("", response_model=ProfileResponse)
def get_profile(
    user_id: UUID = Depends(get_current_user_id), db: Session = Depends(get_db)
):
    profile = ProfileService.get_profile(db, user_id)
    if not profile:
        raise NotFoundError(f"User {user_id} not found")
    return ProfileResponse.model_validate(profile)


@router.put("", response_model=ProfileResponse)
def update_profile(
    payload: ProfileUpdateRequest,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Create or update the caller's profile. Answers 201 with a Location
    header when the profile did not exist yet.
    """
    profile, created = ProfileService.upsert_profile(db, user_id, payload)
    resp = ProfileResponse.model_validate(profile)
    if created:
        return Response(
            content=resp.model_dump_json(),
            status_code=status.HTTP_201_CREATED,
            media_type="application/json",
            headers={"Location": "/me"},
        )
    return resp

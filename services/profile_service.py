from typing import List, Optional, Tuple
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import logging

from domain.enums import UserRole
from domain.models import Profile
from domain.schemas.profile_schemas import ProfileUpdateRequest
from repositories import ProfileRepository, OrderRepository
from app.exceptions import ConflictError, NotFoundError

logger = logging.getLogger("honestmeals.profile")


class ProfileService:
    """Business logic for profile management"""

    @staticmethod
    def get_profile(db: Session, user_id: UUID) -> Optional[Profile]:
        profile = ProfileRepository(db).get_by_id(user_id)
        if profile:
            logger.info(f"profile_fetched user_id={user_id}")
        else:
            logger.warning(f"profile_not_found user_id={user_id}")
        return profile

    @staticmethod
    def upsert_profile(
        db: Session, user_id: UUID, data: ProfileUpdateRequest, commit: bool = True
    ) -> Tuple[Profile, bool]:
        """
        Update or create a profile keyed by the caller's user id.

        Only fields present in the payload are written. Returns a tuple of
        (Profile, created_flag). With ``commit=False`` the change is only
        flushed so callers can include it in a larger transaction.
        """
        repo = ProfileRepository(db)
        profile = repo.get_by_id(user_id)
        created = False
        if profile is None:
            profile = Profile(id=user_id, role=UserRole.CUSTOMER)
            db.add(profile)
            created = True

        changes = data.model_dump(exclude_unset=True)
        if changes.get("email"):
            other = repo.get_by_email(changes["email"])
            if other and other.id != user_id:
                raise ConflictError(f"Email {changes['email']} is already registered")

        for key, value in changes.items():
            setattr(profile, key, value)

        try:
            if commit:
                db.commit()
                db.refresh(profile)
            else:
                db.flush()
        except IntegrityError as e:
            db.rollback()
            raise ConflictError("Profile could not be saved") from e

        logger.info(
            f"profile_upserted user_id={user_id} created={created} fields={sorted(changes)}"
        )
        return profile, created

    @staticmethod
    def list_users(db: Session) -> List[Tuple[Profile, int]]:
        """All profiles with the number of orders each placed"""
        profiles = ProfileRepository(db).list_ordered()
        counts = OrderRepository(db).count_by_customer()
        return [(p, counts.get(p.id, 0)) for p in profiles]

    @staticmethod
    def order_count(db: Session, user_id: UUID) -> int:
        return OrderRepository(db).count_for_customer(user_id)

    @staticmethod
    def set_role(db: Session, user_id: UUID, role: UserRole) -> Profile:
        repo = ProfileRepository(db)
        profile = repo.get_by_id(user_id)
        if not profile:
            raise NotFoundError(f"User {user_id} not found")
        profile.role = role
        profile = repo.update(profile)
        logger.info(f"profile_role_changed user_id={user_id} role={role.value}")
        return profile

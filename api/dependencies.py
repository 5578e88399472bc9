"""
API dependencies for dependency injection
"""

from typing import Generator, Optional
from uuid import UUID
from fastapi import Depends, Header
from sqlalchemy.orm import Session
import logging

from domain.models import Profile, get_db_session
from repositories import ProfileRepository
from app.exceptions import ForbiddenError, UnauthorizedError

logger = logging.getLogger("honestmeals.api.auth")

USER_HEADER = "X-User-Id"


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            # Use db session here
            pass
    """
    yield from get_db_session()


def _parse_user_id(raw: Optional[str]) -> Optional[UUID]:
    if raw is None or not raw.strip():
        return None
    try:
        return UUID(raw.strip())
    except ValueError:
        raise UnauthorizedError(f"Invalid {USER_HEADER} header")


def get_optional_user_id(
    x_user_id: Optional[str] = Header(default=None, alias=USER_HEADER),
) -> Optional[UUID]:
    """Caller id when signed in, None for guests"""
    return _parse_user_id(x_user_id)


def get_current_user_id(
    x_user_id: Optional[str] = Header(default=None, alias=USER_HEADER),
) -> UUID:
    user_id = _parse_user_id(x_user_id)
    if user_id is None:
        raise UnauthorizedError("Please sign in to continue")
    return user_id


def require_admin(
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> Profile:
    """
    Resolve the caller's profile and require the admin role.

    Raises:
        UnauthorizedError: no profile for the caller
        ForbiddenError: caller is not an admin
    """
    profile = ProfileRepository(db).get_by_id(user_id)
    if profile is None:
        raise UnauthorizedError("Unknown user")
    if not profile.is_admin:
        logger.warning(f"admin_access_denied user_id={user_id}")
        raise ForbiddenError("Admin access required")
    return profile

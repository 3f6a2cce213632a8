# academic_journey/services/auth_service.py
"""
Registration and login.

Identity, profile and (for parents) the first child record are created in a
single store transaction. Login failures are deliberately indistinguishable
so the API cannot be used to probe which emails are registered.
"""

import logging
from functools import lru_cache
from typing import Dict, Optional

from sqlalchemy.orm import Session

from academic_journey import models, schemas
from academic_journey.config import settings
from academic_journey.crud import user as user_crud
from academic_journey.exceptions import Conflict, Forbidden, NotFound, Unauthorized
from academic_journey.utils.security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return hash_password("academic-journey-unknown-account")


def to_user_view(profile: models.Profile) -> schemas.UserView:
    return schemas.UserView.model_validate(profile)


# =====================================
# REGISTRATION
# =====================================

def register(
    db: Session,
    request: schemas.RegisterRequest,
    allow_admin: Optional[bool] = None,
) -> schemas.UserView:
    """
    Create a new account.

    Args:
        db: Database session
        request: Validated registration payload
        allow_admin: Override for ALLOW_ADMIN_REGISTRATION (bootstrap script)

    Raises:
        Conflict: email (or child admission number) already registered
        Forbidden: admin self-registration is disabled
        StoreUnavailable: database failure
    """
    role = request.role or models.Role.PARENT
    if allow_admin is None:
        allow_admin = settings.ALLOW_ADMIN_REGISTRATION
    if role is models.Role.ADMIN and not allow_admin:
        raise Forbidden("Admin accounts cannot be self-registered")

    if user_crud.find_identity_by_email(db, request.email) is not None:
        raise Conflict("Email already registered")

    identity = models.User(
        email=request.email,
        password_hash=hash_password(request.password),
    )
    profile = models.Profile(
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        role=role,
    )

    student = None
    if role is models.Role.PARENT and request.child_details is not None:
        child = request.child_details
        student = models.Student(
            first_name=child.first_name,
            last_name=child.last_name,
            admission_number=child.admission_number,
            date_of_birth=child.date_of_birth,
            grade=child.grade,
            stream=child.stream,
        )

    identity, profile = user_crud.create_identity_and_profile(db, identity, profile, student)
    logger.info("Registered %s account for %s", role.value, request.email)
    return to_user_view(profile)


# =====================================
# LOGIN
# =====================================

def login(db: Session, credentials: schemas.LoginRequest) -> Dict[str, object]:
    """Return ``{"user": UserView, "token": str}`` or raise ``Unauthorized``."""
    identity = user_crud.find_identity_by_email(db, credentials.email)
    if identity is None:
        # Same bcrypt cost as a real check so response time reveals nothing.
        verify_password(credentials.password, _dummy_hash())
        logger.info("Login failed: unknown email")
        raise Unauthorized(INVALID_CREDENTIALS)

    if not verify_password(credentials.password, identity.password_hash):
        logger.info("Login failed: wrong password for %s", credentials.email)
        raise Unauthorized(INVALID_CREDENTIALS)

    profile = user_crud.get_profile(db, identity.id)
    if profile is None:
        logger.error("Identity %s has no profile row", identity.id)
        raise Unauthorized(INVALID_CREDENTIALS)

    token = create_access_token(profile)
    logger.info("Login succeeded for %s", credentials.email)
    return {"user": to_user_view(profile), "token": token}


# =====================================
# PROFILE
# =====================================

def get_profile_by_id(db: Session, user_id: str) -> schemas.UserView:
    profile = user_crud.get_profile(db, user_id)
    if profile is None:
        raise NotFound("User profile not found")
    return to_user_view(profile)

# academic_journey/services/access_control.py
"""
Authorization decisions, kept free of HTTP concerns.

Admins and teachers see every student; a parent sees only the students whose
``parent_id`` is their own identity id.
"""

import logging
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from academic_journey import schemas
from academic_journey.crud import academic as academic_crud
from academic_journey.crud import user as user_crud
from academic_journey.exceptions import Forbidden, ValidationError
from academic_journey.models.user import Role

logger = logging.getLogger(__name__)

STAFF_ROLES = frozenset({Role.ADMIN, Role.TEACHER})


def ensure_role(
    claims: schemas.TokenClaims,
    allowed_roles: Iterable[Role],
    message: Optional[str] = None,
) -> None:
    if claims.role not in allowed_roles:
        logger.info("Role %s denied (needs one of %s)", claims.role.value, sorted(r.value for r in allowed_roles))
        raise Forbidden(message or "Access denied. Insufficient permissions")


def ensure_student_access(db: Session, claims: schemas.TokenClaims, student_id: Optional[str]) -> None:
    if not student_id:
        raise ValidationError("Student ID required")

    if claims.role in STAFF_ROLES:
        return

    if claims.role is Role.PARENT:
        if user_crud.is_parent_of(db, claims.id, student_id):
            return
        logger.info("Parent %s denied access to student %s", claims.id, student_id)
        raise Forbidden("Access denied. Not your child")

    raise Forbidden()


def visible_students(db: Session, claims: schemas.TokenClaims):
    """Students the caller may list: everyone for staff, own children for parents."""
    if claims.role in STAFF_ROLES:
        return academic_crud.list_students(db)
    if claims.role is Role.PARENT:
        return user_crud.find_students_by_parent(db, claims.id)
    raise Forbidden()

"""
Request gates shared by the routers.

``get_current_user`` turns the bearer token into ``TokenClaims`` and hands
them to the endpoint explicitly; nothing is stashed on global state.
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from academic_journey import schemas
from academic_journey.database import get_db
from academic_journey.exceptions import Unauthorized
from academic_journey.models.user import Role
from academic_journey.services.access_control import ensure_role, ensure_student_access
from academic_journey.utils.security import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


# ==========================
# AUTHENTICATION
# ==========================

def get_current_user(token: Optional[str] = Depends(oauth2_scheme)) -> schemas.TokenClaims:
    if not token:
        raise Unauthorized("Authentication required")

    claims = decode_access_token(token)
    if claims is None:
        raise Unauthorized("Invalid or expired token")
    return claims


# ==========================
# ROLE GATES
# ==========================

def authorize(*roles: Role, message: Optional[str] = None):
    allowed = frozenset(roles)

    def role_gate(current_user: schemas.TokenClaims = Depends(get_current_user)) -> schemas.TokenClaims:
        ensure_role(current_user, allowed, message)
        return current_user

    return role_gate


require_admin = authorize(Role.ADMIN, message="Admin access required")
require_teacher = authorize(Role.TEACHER, message="Teacher access required")
require_parent = authorize(Role.PARENT, message="Parent access required")
require_staff = authorize(Role.ADMIN, Role.TEACHER)


# ==========================
# OWNERSHIP GATE
# ==========================

async def target_student_id(request: Request) -> Optional[str]:
    """studentId from the path, falling back to the JSON body."""
    student_id = request.path_params.get("student_id")
    if student_id:
        return str(student_id)

    if request.method in ("POST", "PUT", "PATCH"):
        try:
            body = await request.json()
        except ValueError:
            return None
        if isinstance(body, dict) and body.get("studentId"):
            return str(body["studentId"])
    return None


def can_access_student_data(
    current_user: schemas.TokenClaims = Depends(get_current_user),
    student_id: Optional[str] = Depends(target_student_id),
    db: Session = Depends(get_db),
) -> schemas.TokenClaims:
    ensure_student_access(db, current_user, student_id)
    return current_user

# academic_journey/api/admin.py
"""Admin-only endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from academic_journey import schemas
from academic_journey.api.deps import require_admin
from academic_journey.crud import user as user_crud
from academic_journey.database import get_db

router = APIRouter(prefix="/admin", tags=["Admin"])


# ─────────────────────────────────────────
# GET /admin/users  — List all profiles
# ─────────────────────────────────────────
@router.get("/users", response_model=schemas.UserListResponse)
def get_all_users(
    admin: schemas.TokenClaims = Depends(require_admin),
    db: Session = Depends(get_db),
):
    profiles = user_crud.list_profiles(db)
    return schemas.UserListResponse(
        users=[schemas.UserView.model_validate(p) for p in profiles]
    )

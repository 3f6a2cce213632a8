from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from academic_journey import schemas
from academic_journey.api.deps import get_current_user
from academic_journey.database import get_db
from academic_journey.exceptions import NotFound, Unauthorized
from academic_journey.services import auth_service

router = APIRouter(prefix="/auth", tags=["Authentication"])


# ===== REGISTER ENDPOINT =====

@router.post("/register", response_model=schemas.UserResponse, status_code=status.HTTP_201_CREATED)
def register(payload: schemas.RegisterRequest, db: Session = Depends(get_db)):
    """Create identity + profile (and the child record for parents)."""
    user = auth_service.register(db, payload)
    return schemas.UserResponse(user=user)


# ===== LOGIN ENDPOINT =====

@router.post("/login", response_model=schemas.LoginResponse)
def login(credentials: schemas.LoginRequest, db: Session = Depends(get_db)):
    """Verify credentials and return the profile with an access token."""
    result = auth_service.login(db, credentials)
    return schemas.LoginResponse(user=result["user"], token=result["token"])


# ===== WHO AM I =====

@router.get("/me", response_model=schemas.UserResponse)
def me(
    current_user: schemas.TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        user = auth_service.get_profile_by_id(db, current_user.id)
    except NotFound:
        # Valid signature but the account is gone.
        raise Unauthorized("Invalid or expired token")
    return schemas.UserResponse(user=user)

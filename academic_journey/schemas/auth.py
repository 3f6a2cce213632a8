from datetime import date, datetime
from typing import List, Optional

from email_validator import validate_email
from pydantic import BaseModel, Field, field_validator

from academic_journey.models.user import Role
from academic_journey.schemas.base import CamelModel


def _normalize_email(value: str) -> str:
    # test_environment admits reserved names such as school.test used in demos.
    checked = validate_email(value.strip(), check_deliverability=False, test_environment=True)
    return checked.normalized.lower()


# ======================
# TOKEN SCHEMAS
# ======================

class TokenClaims(BaseModel):
    id: str
    email: str
    role: Role
    iat: Optional[int] = None
    exp: Optional[int] = None


# ======================
# REGISTRATION
# ======================

class ChildDetails(CamelModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    admission_number: str = Field(..., min_length=1, max_length=50)
    date_of_birth: date
    grade: str = Field(..., min_length=1, max_length=20)
    stream: Optional[str] = Field(None, max_length=20)


class RegisterRequest(CamelModel):
    email: str
    password: str = Field(..., min_length=6)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    # None means "parent"; resolved by the auth service.
    role: Optional[Role] = None
    child_details: Optional[ChildDetails] = None

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        return _normalize_email(value)


# ======================
# LOGIN
# ======================

class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _strip_email(cls, value: str) -> str:
        # No format check here: a malformed email is just a failed login.
        return value.strip().lower()


# ======================
# RESPONSES
# ======================

class UserView(CamelModel):
    id: str
    email: str
    first_name: str
    last_name: str
    role: Role
    created_at: Optional[datetime] = None


class UserResponse(BaseModel):
    success: bool = True
    user: UserView


class LoginResponse(BaseModel):
    success: bool = True
    user: UserView
    token: str


class UserListResponse(BaseModel):
    success: bool = True
    users: List[UserView]

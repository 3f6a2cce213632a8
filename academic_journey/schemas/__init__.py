# academic_journey/schemas/__init__.py

# Auth schemas
from .auth import (
    TokenClaims,
    ChildDetails,
    RegisterRequest,
    LoginRequest,
    UserView,
    UserResponse,
    LoginResponse,
    UserListResponse,
)

# Student / grade / feedback schemas
from .academic import (
    StudentView,
    StudentListResponse,
    GradeCreate,
    GradeView,
    GradeResponse,
    GradeListResponse,
    FeedbackCreate,
    FeedbackView,
    FeedbackResponse,
    FeedbackListResponse,
)

__all__ = [
    "TokenClaims",
    "ChildDetails",
    "RegisterRequest",
    "LoginRequest",
    "UserView",
    "UserResponse",
    "LoginResponse",
    "UserListResponse",
    "StudentView",
    "StudentListResponse",
    "GradeCreate",
    "GradeView",
    "GradeResponse",
    "GradeListResponse",
    "FeedbackCreate",
    "FeedbackView",
    "FeedbackResponse",
    "FeedbackListResponse",
]

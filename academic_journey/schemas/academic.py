from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from academic_journey.schemas.base import CamelModel


# ======================
# STUDENTS
# ======================

class StudentView(CamelModel):
    id: str
    first_name: str
    last_name: str
    admission_number: str
    date_of_birth: date
    grade: str
    stream: Optional[str] = None
    parent_id: Optional[str] = None
    # Filled in for admin/teacher listings only.
    parent_first_name: Optional[str] = None
    parent_last_name: Optional[str] = None
    parent_email: Optional[str] = None


class StudentListResponse(BaseModel):
    success: bool = True
    students: List[StudentView]


# ======================
# GRADES
# ======================

class GradeCreate(CamelModel):
    student_id: str = Field(..., min_length=1)
    subject_id: str = Field(..., min_length=1)
    score: float = Field(..., ge=0, le=100)
    term: str = Field(..., min_length=1, max_length=20)
    academic_year: str = Field(..., min_length=1, max_length=20)
    comment: Optional[str] = None


class GradeView(CamelModel):
    id: str
    student_id: str
    subject_id: str
    teacher_id: str
    score: float
    term: str
    academic_year: str
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    subject_name: Optional[str] = None
    subject_code: Optional[str] = None
    teacher_first_name: Optional[str] = None
    teacher_last_name: Optional[str] = None


class GradeResponse(BaseModel):
    success: bool = True
    grade: GradeView


class GradeListResponse(BaseModel):
    success: bool = True
    grades: List[GradeView]


# ======================
# FEEDBACK
# ======================

class FeedbackCreate(CamelModel):
    student_id: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    date: date


class FeedbackView(CamelModel):
    id: str
    student_id: str
    teacher_id: str
    content: str
    date: date
    created_at: Optional[datetime] = None
    teacher_first_name: Optional[str] = None
    teacher_last_name: Optional[str] = None


class FeedbackResponse(BaseModel):
    success: bool = True
    feedback: FeedbackView


class FeedbackListResponse(BaseModel):
    success: bool = True
    feedback: List[FeedbackView]

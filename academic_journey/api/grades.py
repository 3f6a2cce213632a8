from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from academic_journey import models, schemas
from academic_journey.api.deps import can_access_student_data, require_staff
from academic_journey.crud import academic as academic_crud
from academic_journey.crud import user as user_crud
from academic_journey.database import get_db
from academic_journey.exceptions import NotFound

router = APIRouter(prefix="/grades", tags=["Grades"])


def _grade_view(grade: models.Grade) -> schemas.GradeView:
    view = schemas.GradeView.model_validate(grade)
    if grade.subject is not None:
        view.subject_name = grade.subject.name
        view.subject_code = grade.subject.code
    if grade.teacher is not None:
        view.teacher_first_name = grade.teacher.first_name
        view.teacher_last_name = grade.teacher.last_name
    return view


@router.get("/{student_id}", response_model=schemas.GradeListResponse)
def get_student_grades(
    student_id: str,
    current_user: schemas.TokenClaims = Depends(can_access_student_data),
    db: Session = Depends(get_db),
):
    grades = academic_crud.get_grades_for_student(db, student_id)
    return schemas.GradeListResponse(grades=[_grade_view(g) for g in grades])


@router.post("", response_model=schemas.GradeResponse, status_code=status.HTTP_201_CREATED)
def create_grade(
    payload: schemas.GradeCreate,
    current_user: schemas.TokenClaims = Depends(require_staff),
    db: Session = Depends(get_db),
):
    if user_crud.find_student(db, payload.student_id) is None:
        raise NotFound("Student not found")
    if academic_crud.get_subject(db, payload.subject_id) is None:
        raise NotFound("Subject not found")

    grade = academic_crud.create_grade(
        db,
        models.Grade(
            student_id=payload.student_id,
            subject_id=payload.subject_id,
            teacher_id=current_user.id,
            score=payload.score,
            term=payload.term,
            academic_year=payload.academic_year,
            comment=payload.comment,
        ),
    )
    return schemas.GradeResponse(grade=_grade_view(grade))

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from academic_journey import models, schemas
from academic_journey.api.deps import get_current_user
from academic_journey.database import get_db
from academic_journey.models.user import Role
from academic_journey.services.access_control import visible_students

router = APIRouter(prefix="/students", tags=["Students"])


def _student_view(student: models.Student, include_parent: bool) -> schemas.StudentView:
    view = schemas.StudentView.model_validate(student)
    parent_profile = student.parent.profile if include_parent and student.parent else None
    if parent_profile is not None:
        view.parent_first_name = parent_profile.first_name
        view.parent_last_name = parent_profile.last_name
        view.parent_email = parent_profile.email
    return view


@router.get("", response_model=schemas.StudentListResponse)
def list_students(
    current_user: schemas.TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    students = visible_students(db, current_user)
    include_parent = current_user.role is not Role.PARENT
    return schemas.StudentListResponse(
        students=[_student_view(s, include_parent) for s in students]
    )

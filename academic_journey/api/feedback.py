from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from academic_journey import models, schemas
from academic_journey.api.deps import can_access_student_data, require_staff
from academic_journey.crud import academic as academic_crud
from academic_journey.crud import user as user_crud
from academic_journey.database import get_db
from academic_journey.exceptions import NotFound

router = APIRouter(prefix="/feedback", tags=["Feedback"])


def _feedback_view(item: models.Feedback) -> schemas.FeedbackView:
    view = schemas.FeedbackView.model_validate(item)
    if item.teacher is not None:
        view.teacher_first_name = item.teacher.first_name
        view.teacher_last_name = item.teacher.last_name
    return view


@router.get("/{student_id}", response_model=schemas.FeedbackListResponse)
def get_student_feedback(
    student_id: str,
    current_user: schemas.TokenClaims = Depends(can_access_student_data),
    db: Session = Depends(get_db),
):
    items = academic_crud.get_feedback_for_student(db, student_id)
    return schemas.FeedbackListResponse(feedback=[_feedback_view(f) for f in items])


@router.post("", response_model=schemas.FeedbackResponse, status_code=status.HTTP_201_CREATED)
def create_feedback(
    payload: schemas.FeedbackCreate,
    current_user: schemas.TokenClaims = Depends(require_staff),
    db: Session = Depends(get_db),
):
    if user_crud.find_student(db, payload.student_id) is None:
        raise NotFound("Student not found")

    item = academic_crud.create_feedback(
        db,
        models.Feedback(
            student_id=payload.student_id,
            teacher_id=current_user.id,
            content=payload.content,
            date=payload.date,
        ),
    )
    return schemas.FeedbackResponse(feedback=_feedback_view(item))

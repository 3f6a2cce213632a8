from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from academic_journey import models
from academic_journey.crud.user import store_errors


def list_students(db: Session) -> List[models.Student]:
    with store_errors("list_students"):
        return (
            db.query(models.Student)
            .options(joinedload(models.Student.parent).joinedload(models.User.profile))
            .order_by(models.Student.last_name, models.Student.first_name)
            .all()
        )


def get_subject(db: Session, subject_id: str) -> Optional[models.Subject]:
    with store_errors("get_subject"):
        return db.query(models.Subject).filter(models.Subject.id == subject_id).first()


def get_grades_for_student(db: Session, student_id: str) -> List[models.Grade]:
    with store_errors("get_grades_for_student"):
        return (
            db.query(models.Grade)
            .options(joinedload(models.Grade.subject), joinedload(models.Grade.teacher))
            .filter(models.Grade.student_id == student_id)
            .order_by(models.Grade.academic_year, models.Grade.term)
            .all()
        )


def get_feedback_for_student(db: Session, student_id: str) -> List[models.Feedback]:
    with store_errors("get_feedback_for_student"):
        return (
            db.query(models.Feedback)
            .options(joinedload(models.Feedback.teacher))
            .filter(models.Feedback.student_id == student_id)
            .order_by(models.Feedback.date.desc())
            .all()
        )


def create_grade(db: Session, grade: models.Grade) -> models.Grade:
    with store_errors("create_grade"):
        try:
            db.add(grade)
            db.commit()
        except BaseException:
            db.rollback()
            raise
        db.refresh(grade)
    return grade


def create_feedback(db: Session, feedback: models.Feedback) -> models.Feedback:
    with store_errors("create_feedback"):
        try:
            db.add(feedback)
            db.commit()
        except BaseException:
            db.rollback()
            raise
        db.refresh(feedback)
    return feedback

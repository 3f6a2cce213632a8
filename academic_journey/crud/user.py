"""
Credential store: identity, profile and student rows.

Every failure coming out of the database is translated into the shared
error taxonomy (``Conflict`` for uniqueness violations, ``StoreUnavailable``
for anything connectivity related) so callers never see raw driver errors.
"""

import logging
from contextlib import contextmanager
from typing import List, Optional

from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from academic_journey import models
from academic_journey.exceptions import Conflict, StoreUnavailable

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(operation: str):
    try:
        yield
    except IntegrityError as exc:
        logger.info("Integrity constraint rejected %s: %s", operation, exc.orig)
        raise Conflict() from exc
    except (DBAPIError, SQLAlchemyError) as exc:
        logger.exception("Credential store failure during %s", operation)
        raise StoreUnavailable() from exc


def find_identity_by_email(db: Session, email: str) -> Optional[models.User]:
    with store_errors("find_identity_by_email"):
        return db.query(models.User).filter(models.User.email == email).first()


def get_profile(db: Session, user_id: str) -> Optional[models.Profile]:
    with store_errors("get_profile"):
        return db.query(models.Profile).filter(models.Profile.id == user_id).first()


def list_profiles(db: Session) -> List[models.Profile]:
    with store_errors("list_profiles"):
        return db.query(models.Profile).order_by(models.Profile.created_at.desc()).all()


def find_student(db: Session, student_id: str) -> Optional[models.Student]:
    with store_errors("find_student"):
        return db.query(models.Student).filter(models.Student.id == student_id).first()


def find_students_by_parent(db: Session, parent_id: str) -> List[models.Student]:
    with store_errors("find_students_by_parent"):
        return (
            db.query(models.Student)
            .filter(models.Student.parent_id == parent_id)
            .order_by(models.Student.last_name, models.Student.first_name)
            .all()
        )


def is_parent_of(db: Session, parent_id: str, student_id: str) -> bool:
    with store_errors("is_parent_of"):
        owned = db.query(models.Student.id).filter(
            models.Student.id == student_id,
            models.Student.parent_id == parent_id,
        ).first()
    return owned is not None


def count_admins(db: Session) -> int:
    with store_errors("count_admins"):
        return db.query(models.Profile).filter(models.Profile.role == models.Role.ADMIN).count()


def create_identity_and_profile(
    db: Session,
    identity: models.User,
    profile: models.Profile,
    student: Optional[models.Student] = None,
):
    """
    Persist identity, profile and (optionally) the linked student in one
    transaction. Uniqueness is re-checked by the database constraints here,
    so a caller's earlier lookup is only an optimisation.

    Returns:
        (identity, profile) as committed rows

    Raises:
        Conflict: email or admission number already taken
        StoreUnavailable: the database could not be reached
    """
    try:
        db.add(identity)
        db.flush()

        profile.id = identity.id
        db.add(profile)

        if student is not None:
            student.parent_id = identity.id
            db.add(student)

        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.info("Registration rejected by unique constraint: %s", exc.orig)
        raise Conflict("An account with these details already exists") from exc
    except (DBAPIError, SQLAlchemyError) as exc:
        db.rollback()
        logger.exception("Registration transaction failed")
        raise StoreUnavailable() from exc
    except BaseException:
        db.rollback()
        raise

    with store_errors("create_identity_and_profile"):
        db.refresh(profile)
    return identity, profile

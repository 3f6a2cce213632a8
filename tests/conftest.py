"""Shared fixtures: isolated SQLite databases and an API client bound to them."""

import os
import sys
from pathlib import Path

# Ensure project root is on sys.path so `import academic_journey` works
PROJECT_ROOT = str(Path(__file__).resolve().parents[1])
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

# Settings are read at import time, so the environment has to be ready first.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-for-the-academic-journey-suite"
os.environ["APP_ENV"] = "test"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ALLOW_ADMIN_REGISTRATION"] = "false"

from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from academic_journey import models, schemas
from academic_journey.database import Base, get_db
from academic_journey.models.user import Role
from academic_journey.services import auth_service

DEFAULT_PASSWORD = "Secret123!"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(session_factory):
    from fastapi.testclient import TestClient
    from academic_journey.main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        except BaseException:
            db.rollback()
            raise
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def register_user(db, email, role=Role.PARENT, password=DEFAULT_PASSWORD, child=None, first_name="Test", last_name="User"):
    request = schemas.RegisterRequest(
        email=email,
        password=password,
        first_name=first_name,
        last_name=last_name,
        role=role,
        child_details=child,
    )
    return auth_service.register(db, request, allow_admin=True)


def child_details(admission_number, first_name="Amani", last_name="Otieno"):
    return schemas.ChildDetails(
        first_name=first_name,
        last_name=last_name,
        admission_number=admission_number,
        date_of_birth=date(2014, 3, 9),
        grade="Grade 5",
        stream="East",
    )


def student_of(db, parent_id):
    return db.query(models.Student).filter(models.Student.parent_id == parent_id).one()


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def school(session_factory):
    """Two parents with one child each, a teacher, an admin and a subject."""
    with session_factory() as db:
        parent_a = register_user(db, "parent.a@school.test", child=child_details("ADM-001"))
        parent_b = register_user(db, "parent.b@school.test", child=child_details("ADM-002", first_name="Baraka"))
        teacher = register_user(db, "teacher@school.test", role=Role.TEACHER)
        admin = register_user(db, "admin@school.test", role=Role.ADMIN)

        subject = models.Subject(name="Mathematics", code="MATH")
        db.add(subject)
        db.commit()

        return {
            "parent_a": parent_a,
            "parent_b": parent_b,
            "teacher": teacher,
            "admin": admin,
            "student_a": student_of(db, parent_a.id).id,
            "student_b": student_of(db, parent_b.id).id,
            "subject": subject.id,
        }


@pytest.fixture
def tokens(client, school):
    def login(email):
        response = client.post("/auth/login", json={"email": email, "password": DEFAULT_PASSWORD})
        assert response.status_code == 200, response.text
        return response.json()["token"]

    return {
        "parent_a": login("parent.a@school.test"),
        "parent_b": login("parent.b@school.test"),
        "teacher": login("teacher@school.test"),
        "admin": login("admin@school.test"),
    }

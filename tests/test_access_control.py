import pytest

from academic_journey import schemas
from academic_journey.exceptions import Forbidden, ValidationError
from academic_journey.models.user import Role
from academic_journey.services.access_control import ensure_role, ensure_student_access

from conftest import auth_header


def _claims(user):
    return schemas.TokenClaims(id=user.id, email=user.email, role=user.role)


# ======================
# DECISION FUNCTIONS
# ======================

def test_staff_can_access_any_student(db_session, school):
    for key in ("admin", "teacher"):
        claims = _claims(school[key])
        ensure_student_access(db_session, claims, school["student_a"])
        ensure_student_access(db_session, claims, school["student_b"])


def test_parent_limited_to_own_child(db_session, school):
    parent_b = _claims(school["parent_b"])
    ensure_student_access(db_session, parent_b, school["student_b"])

    with pytest.raises(Forbidden) as exc:
        ensure_student_access(db_session, parent_b, school["student_a"])
    assert exc.value.message == "Access denied. Not your child"


def test_parent_denied_for_unknown_student(db_session, school):
    with pytest.raises(Forbidden):
        ensure_student_access(db_session, _claims(school["parent_a"]), "no-such-student")


def test_missing_student_id_is_bad_request(db_session, school):
    with pytest.raises(ValidationError):
        ensure_student_access(db_session, _claims(school["admin"]), None)


def test_role_gate():
    teacher = schemas.TokenClaims(id="t", email="t@school.test", role=Role.TEACHER)
    ensure_role(teacher, {Role.ADMIN, Role.TEACHER})
    with pytest.raises(Forbidden):
        ensure_role(teacher, {Role.ADMIN})


# ======================
# HTTP GATES
# ======================

def test_admin_users_requires_admin(client, tokens):
    response = client.get("/admin/users", headers=auth_header(tokens["admin"]))
    assert response.status_code == 200
    emails = {u["email"] for u in response.json()["users"]}
    assert {"parent.a@school.test", "teacher@school.test", "admin@school.test"} <= emails

    for role in ("teacher", "parent_a"):
        response = client.get("/admin/users", headers=auth_header(tokens[role]))
        assert response.status_code == 403
        assert response.json()["error"] == "Admin access required"


def test_admin_users_without_token_is_401_not_403(client, school):
    assert client.get("/admin/users").status_code == 401
    response = client.get("/admin/users", headers=auth_header("garbage.token.value"))
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid or expired token"


def test_grade_ownership_over_http(client, school, tokens):
    student_a = school["student_a"]

    assert client.get(f"/grades/{student_a}", headers=auth_header(tokens["parent_a"])).status_code == 200
    assert client.get(f"/grades/{student_a}", headers=auth_header(tokens["teacher"])).status_code == 200
    assert client.get(f"/grades/{student_a}", headers=auth_header(tokens["admin"])).status_code == 200

    response = client.get(f"/grades/{student_a}", headers=auth_header(tokens["parent_b"]))
    assert response.status_code == 403
    assert response.json()["error"] == "Access denied. Not your child"


def test_feedback_ownership_over_http(client, school, tokens):
    student_b = school["student_b"]
    assert client.get(f"/feedback/{student_b}", headers=auth_header(tokens["parent_b"])).status_code == 200
    assert client.get(f"/feedback/{student_b}", headers=auth_header(tokens["parent_a"])).status_code == 403


def test_student_listing_is_scoped(client, school, tokens):
    mine = client.get("/students", headers=auth_header(tokens["parent_a"])).json()["students"]
    assert [s["id"] for s in mine] == [school["student_a"]]
    assert mine[0]["parentEmail"] is None

    everyone = client.get("/students", headers=auth_header(tokens["teacher"])).json()["students"]
    assert {s["id"] for s in everyone} == {school["student_a"], school["student_b"]}
    assert {s["parentEmail"] for s in everyone} == {"parent.a@school.test", "parent.b@school.test"}


def test_named_single_role_gates():
    from academic_journey.api.deps import require_admin, require_parent, require_teacher

    parent = schemas.TokenClaims(id="p", email="p@school.test", role=Role.PARENT)
    assert require_parent(current_user=parent) is parent

    for gate, message in (
        (require_admin, "Admin access required"),
        (require_teacher, "Teacher access required"),
    ):
        with pytest.raises(Forbidden) as exc:
            gate(current_user=parent)
        assert exc.value.message == message


# ======================
# OWNERSHIP FROM THE REQUEST BODY
# ======================

@pytest.fixture
def body_guarded_client(session_factory):
    from fastapi import Depends, FastAPI
    from fastapi.testclient import TestClient

    from academic_journey.database import get_db
    from academic_journey.exceptions import AppError
    from academic_journey.api.deps import can_access_student_data
    from academic_journey.main import app_error_handler

    app = FastAPI()
    app.add_exception_handler(AppError, app_error_handler)

    @app.post("/reports")
    def create_report(current_user: schemas.TokenClaims = Depends(can_access_student_data)):
        return {"success": True, "requestedBy": current_user.id}

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


def test_body_student_id_is_ownership_checked(body_guarded_client, school, tokens):
    payload = {"studentId": school["student_a"], "summary": "Term report"}

    response = body_guarded_client.post("/reports", json=payload, headers=auth_header(tokens["parent_b"]))
    assert response.status_code == 403
    assert response.json()["error"] == "Access denied. Not your child"

    response = body_guarded_client.post("/reports", json=payload, headers=auth_header(tokens["parent_a"]))
    assert response.status_code == 200
    assert response.json()["requestedBy"] == school["parent_a"].id


def test_malformed_body_is_missing_student_id(body_guarded_client, tokens):
    headers = {**auth_header(tokens["parent_a"]), "Content-Type": "application/json"}
    response = body_guarded_client.post("/reports", content=b"{not json", headers=headers)
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Student ID required"}

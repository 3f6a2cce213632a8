import os
import re
import sys
from typing import Optional

from academic_journey import schemas
from academic_journey.crud import user as user_crud
from academic_journey.database import SessionLocal
from academic_journey.exceptions import AppError
from academic_journey.models.user import Role
from academic_journey.services import auth_service


def _is_truthy(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "y", "on"}


def _required_env(key: str) -> str:
    value = os.getenv(key, "").strip()
    if not value:
        raise ValueError(f"Missing required environment variable: {key}")
    return value


def _validate_password(password: str) -> None:
    if len(password) < 8:
        raise ValueError("ADMIN_PASSWORD must be at least 8 characters.")
    if len(password.encode("utf-8")) > 72:
        raise ValueError("ADMIN_PASSWORD must be <= 72 bytes (bcrypt limit).")
    if not re.search(r"[A-Z]", password):
        raise ValueError("ADMIN_PASSWORD must contain at least one uppercase letter.")
    if not re.search(r"[a-z]", password):
        raise ValueError("ADMIN_PASSWORD must contain at least one lowercase letter.")
    if not re.search(r"\d", password):
        raise ValueError("ADMIN_PASSWORD must contain at least one digit.")


def bootstrap_admin(session_factory=SessionLocal) -> int:
    try:
        if not _is_truthy(os.getenv("ENABLE_ADMIN_BOOTSTRAP")):
            raise ValueError(
                "Bootstrap disabled. Set ENABLE_ADMIN_BOOTSTRAP=true to run."
            )

        password = _required_env("ADMIN_PASSWORD")
        _validate_password(password)
        request = schemas.RegisterRequest(
            email=_required_env("ADMIN_EMAIL"),
            password=password,
            first_name=_required_env("ADMIN_FIRST_NAME"),
            last_name=_required_env("ADMIN_LAST_NAME"),
            role=Role.ADMIN,
        )

        db = session_factory()
        try:
            if user_crud.count_admins(db) > 0:
                raise ValueError(
                    "Admin bootstrap blocked: an admin already exists. "
                    "This command is one-time for first admin creation."
                )
            user = auth_service.register(db, request, allow_admin=True)
        finally:
            db.close()

        print(f"Admin created successfully: {user.email}")
        return 0
    except (ValueError, AppError) as exc:
        print(f"Admin bootstrap failed: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(bootstrap_admin())

import enum
import uuid

from sqlalchemy import Column, String, ForeignKey, TIMESTAMP, Enum, func
from sqlalchemy.orm import relationship

from academic_journey.database import Base


def new_id() -> str:
    return str(uuid.uuid4())


class Role(str, enum.Enum):
    ADMIN = "admin"
    TEACHER = "teacher"
    PARENT = "parent"


# Stored as the lowercase value ("parent"), not the member name.
RoleColumn = Enum(
    Role,
    name="user_role",
    values_callable=lambda roles: [role.value for role in roles],
    validate_strings=True,
)


# ---------------- USER (AUTH TABLE) ----------------
class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    profile = relationship("Profile", back_populates="user", uselist=False, cascade="all, delete-orphan")
    children = relationship("Student", back_populates="parent")


# ---------------- PROFILE TABLE ----------------
class Profile(Base):
    __tablename__ = "profiles"

    # Same id as the owning users row (1:1).
    id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    role = Column(RoleColumn, nullable=False, default=Role.PARENT)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="profile")

from sqlalchemy import Column, String, Date, ForeignKey, TIMESTAMP, func
from sqlalchemy.orm import relationship

from academic_journey.database import Base
from academic_journey.models.user import new_id


class Student(Base):
    __tablename__ = "students"

    id = Column(String(36), primary_key=True, default=new_id)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    admission_number = Column(String(50), unique=True, index=True, nullable=False)
    date_of_birth = Column(Date, nullable=False)
    grade = Column(String(20), nullable=False)
    stream = Column(String(20), nullable=True)
    parent_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(TIMESTAMP, server_default=func.now())

    parent = relationship("User", back_populates="children")
    grades = relationship("Grade", back_populates="student", cascade="all, delete-orphan")
    feedback = relationship("Feedback", back_populates="student", cascade="all, delete-orphan")

# academic_journey/models/academic.py
from sqlalchemy import Column, String, Date, Float, Text, ForeignKey, TIMESTAMP, func
from sqlalchemy.orm import relationship

from academic_journey.database import Base
from academic_journey.models.user import new_id


class Subject(Base):
    __tablename__ = "subjects"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(100), nullable=False)
    code = Column(String(20), unique=True, nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.now())


class Grade(Base):
    __tablename__ = "grades"

    id = Column(String(36), primary_key=True, default=new_id)
    student_id = Column(String(36), ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    subject_id = Column(String(36), ForeignKey("subjects.id", ondelete="CASCADE"), nullable=False)
    teacher_id = Column(String(36), ForeignKey("profiles.id"), nullable=False)
    score = Column(Float, nullable=False)
    term = Column(String(20), nullable=False)
    academic_year = Column(String(20), nullable=False)
    comment = Column(Text, nullable=True)
    created_at = Column(TIMESTAMP, server_default=func.now())

    student = relationship("Student", back_populates="grades")
    subject = relationship("Subject")
    teacher = relationship("Profile")


class Feedback(Base):
    __tablename__ = "feedback"

    id = Column(String(36), primary_key=True, default=new_id)
    student_id = Column(String(36), ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    teacher_id = Column(String(36), ForeignKey("profiles.id"), nullable=False)
    content = Column(Text, nullable=False)
    date = Column(Date, nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.now())

    student = relationship("Student", back_populates="feedback")
    teacher = relationship("Profile")

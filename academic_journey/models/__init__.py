# academic_journey/models/__init__.py
# Import models in dependency order
from .user import Role, User, Profile
from .student import Student
from .academic import Subject, Grade, Feedback

__all__ = ["Role", "User", "Profile", "Student", "Subject", "Grade", "Feedback"]

# academic_journey/api/__init__.py
from . import admin, auth, feedback, grades, students

__all__ = ["admin", "auth", "feedback", "grades", "students"]

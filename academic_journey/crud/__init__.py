"""CRUD package: the credential store plus student/grade/feedback queries."""

from . import academic, user

__all__ = ["user", "academic"]

"""
Error taxonomy shared by the store, the services and the HTTP layer.

Every error carries the status code it is surfaced with and a message that
is safe to show to clients. Internal detail belongs in the logs only.
"""

from typing import Any, Dict, List, Optional


class AppError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    default_message = "Validation failed"

    def __init__(self, message: Optional[str] = None, details: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.details = details or []


class Unauthorized(AppError):
    status_code = 401
    default_message = "Authentication required"


class Forbidden(AppError):
    status_code = 403
    default_message = "Access denied"


class NotFound(AppError):
    status_code = 404
    default_message = "Not found"


class Conflict(AppError):
    status_code = 409
    default_message = "Record already exists"


class StoreUnavailable(AppError):
    status_code = 503
    default_message = "Service temporarily unavailable"

"""
Error taxonomy shared by services and routes.

Services raise these; the handlers in `responses.py` turn them into JSON.
"""
from typing import Any, Dict, Optional


class FeedError(Exception):
    """Base class for every error reported to API clients."""

    status_code = 500
    error_code = "INTERNAL_ERROR"
    default_message = "Something went wrong"

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(FeedError):
    """Malformed or missing input."""
    status_code = 400
    error_code = "VALIDATION_ERROR"
    default_message = "Invalid input"


class AuthError(FeedError):
    """Bad credentials or bad token."""
    status_code = 401
    error_code = "UNAUTHORIZED"
    default_message = "Not authenticated"


class NotFound(FeedError):
    status_code = 404
    error_code = "NOT_FOUND"
    default_message = "Resource not found"


class ConflictError(FeedError):
    """A unique field is already taken."""
    status_code = 409
    error_code = "CONFLICT"
    default_message = "Resource conflict"


class InternalError(FeedError):
    pass

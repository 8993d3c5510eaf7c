"""
Centralized error handling and user-friendly error messages.

Services raise the typed ``AppError`` subclasses below; ``main.py`` turns them
into the standard JSON error body at the request boundary.
"""
import logging
from typing import Any

from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base application error."""
    def __init__(self, message: str, status_code: int = 500, details: dict | list | None = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ValidationError(AppError):
    """Validation error."""
    def __init__(self, message: str, details: dict | list | None = None):
        super().__init__(message, status_code=400, details=details)


class DuplicateError(AppError):
    """The record already exists (duplicate email, second application to the same posting)."""
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, status_code=400, details=details)


class NotFoundError(AppError):
    """Resource not found error."""
    def __init__(self, message: str = "Resource not found", details: dict | None = None):
        super().__init__(message, status_code=404, details=details)


class UnauthorizedError(AppError):
    """Unauthorized access error."""
    def __init__(self, message: str = "Unauthorized access", details: dict | None = None):
        super().__init__(message, status_code=401, details=details)


class ForbiddenError(AppError):
    """Forbidden access error."""
    def __init__(self, message: str = "Access forbidden", details: dict | None = None):
        super().__init__(message, status_code=403, details=details)


class ConflictError(AppError):
    """The requested transition is not possible from the current state."""
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, status_code=409, details=details)


class DatabaseError(AppError):
    """Database error."""
    def __init__(self, message: str = "Database operation failed", details: dict | None = None):
        super().__init__(message, status_code=500, details=details)


# User-friendly error messages
ERROR_MESSAGES = {
    # Authentication
    "invalid_credentials": "Invalid email or password. Please try again.",
    "email_exists": "User with this email already exists",
    "weak_password": "Password must be at least 6 characters long.",
    "session_expired": "Your session has expired. Please login again.",
    "caller_mismatch": "You can only act on behalf of your own account.",

    # Verification
    "user_not_found": "User not found",
    "no_verification_pending": "No verification pending",
    "invalid_verification_code": "Invalid verification code",
    "verification_code_expired": "Verification code expired",
    "not_an_ambassador": "User is not an ambassador",
    "not_a_business": "User is not a business account",
    "ambassador_already_verified": "Ambassador is already verified",
    "ambassador_not_verified": "Your account must be verified to create postings",
    "business_not_verified": "Your business account must be verified by an admin before posting",

    # Postings
    "job_not_found": "Job not found",
    "opleiding_not_found": "Opleiding not found",
    "posting_closed": "This posting is no longer accepting applications.",

    # Applications
    "application_not_found": "Application not found",
    "already_applied": "You have already applied for this position",
    "missing_target": "Either jobId or opleidingId must be provided",
    "multiple_targets": "Provide either jobId or opleidingId, not both",

    # General
    "unauthorized": "Please login to access this feature.",
    "admin_only": "Unauthorized",
    "forbidden": "You don't have permission to access this resource.",
    "not_found": "The requested resource was not found.",
    "server_error": "Something went wrong on our end. Please try again later.",
    "database_error": "Database connection issue. Please try again later.",
    "validation_error": "Invalid input",
}


def get_error_message(error_key: str, default: str | None = None) -> str:
    """Get a user-friendly error message."""
    return ERROR_MESSAGES.get(error_key, default or ERROR_MESSAGES["server_error"])


def handle_database_error(error: Exception, operation: str = "") -> AppError:
    """
    Map a database exception to a typed error.

    The raw driver message is logged but never returned to the caller.
    """
    logger.error("Database error during %s: %s", operation, error)

    error_str = str(error).lower()

    if "duplicate" in error_str or "unique" in error_str:
        return DuplicateError("This record already exists. Please check your input.")

    if "foreign key" in error_str:
        return ValidationError("Invalid reference. The related record may have been deleted.")

    return DatabaseError(get_error_message("database_error"))


def create_error_response(
    status_code: int,
    message: str,
    details: Any = None,
) -> JSONResponse:
    """Create a standardized error response."""
    content = {
        "success": False,
        "error": message,
        "status_code": status_code,
    }

    if details:
        content["details"] = details

    return JSONResponse(
        status_code=status_code,
        content=content
    )

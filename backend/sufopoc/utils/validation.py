"""
Validation utilities for input validation and error handling.
"""
import re
from datetime import datetime, timezone
from typing import Any

from ..models.application import ApplicationStatus
from ..models.user import Role
from .error_handlers import ValidationError

EMAIL_PATTERN = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
# Largest id a 64-bit INTEGER column can hold.
MAX_DB_ID = 2**63 - 1


def validate_email(email: str) -> str:
    """Validate email format."""
    if not email or not isinstance(email, str):
        raise ValidationError("Email is required")

    email = email.strip().lower()
    if len(email) > 255:
        raise ValidationError("Email too long (max 255 characters)")

    if not re.match(EMAIL_PATTERN, email):
        raise ValidationError("Invalid email format")

    return email


def validate_password(password: str) -> None:
    """Validate password strength."""
    if not password or not isinstance(password, str):
        raise ValidationError("Password is required")

    if len(password) < 6:
        raise ValidationError("Password must be at least 6 characters")

    if len(password) > 128:
        raise ValidationError("Password too long (max 128 characters)")


def validate_integer_field(
    value: Any,
    field_name: str,
    min_value: int | None = None,
    max_value: int | None = None,
    required: bool = True,
) -> int | None:
    """Validate an integer field."""
    if value is None:
        if required:
            raise ValidationError(f"{field_name} is required")
        return None

    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a valid integer")

    if not isinstance(value, int):
        try:
            value = int(value)
        except (ValueError, TypeError):
            raise ValidationError(f"{field_name} must be a valid integer")

    if min_value is not None and value < min_value:
        raise ValidationError(f"{field_name} must be at least {min_value}")

    if max_value is not None and value > max_value:
        raise ValidationError(f"{field_name} must not exceed {max_value}")

    return value


def validate_role(role: str, allowed: set[Role] | frozenset[Role] | None = None) -> Role:
    """Validate user role; ``allowed`` narrows the accepted set (e.g. signup roles)."""
    if not role or not isinstance(role, str):
        raise ValidationError("Role is required")

    parsed = Role.parse(role)
    valid_roles = allowed if allowed is not None else set(Role)

    if parsed is None or parsed not in valid_roles:
        names = sorted(r.value for r in valid_roles)
        raise ValidationError(f"Invalid role. Must be one of: {', '.join(names)}")

    return parsed


def validate_application_status(status: str) -> ApplicationStatus:
    """Validate an application status value (case-insensitive)."""
    if not status or not isinstance(status, str):
        raise ValidationError("Status is required")

    try:
        return ApplicationStatus(status.strip().upper())
    except ValueError:
        names = [s.value for s in ApplicationStatus]
        raise ValidationError(f"Invalid status. Must be one of: {', '.join(names)}") from None


def ensure_utc(value: datetime | None) -> datetime | None:
    """SQLite hands back naive datetimes; everything is stored in UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def clean_string_list(values: list | None) -> list[str]:
    if not values:
        return []
    return [str(v).strip() for v in values if str(v).strip()]

"""
Shared validation functions for account, profile and checkpoint input.

These raise services.exceptions.ValidationError (not pydantic errors) so the
messages and field names reach clients exactly as written here.
"""
import re

from core.limits import get_account_limits
from core.passwords import BCRYPT_MAX_PASSWORD_BYTES
from services.exceptions import ValidationError

# Anything@anything.tld with no whitespace - a format check, not deliverability
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def require_fields(**values: str | None) -> None:
    """Reject the request if any required field is missing or blank."""
    for field, value in values.items():
        if value is None or not value.strip():
            raise ValidationError("All fields are required", field=field)


def validate_email(email: str) -> str:
    """Normalize and validate an email address."""
    email = email.strip().lower()
    if not EMAIL_PATTERN.match(email):
        raise ValidationError("Invalid email", field="email")
    return email


def validate_new_password(password: str) -> str:
    """Enforce the password length bounds for new accounts."""
    min_length = get_account_limits().min_password_length
    if len(password) < min_length:
        raise ValidationError(
            f"Password must contain at least {min_length} characters",
            field="password",
        )
    if len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValidationError(
            f"Password cannot exceed {BCRYPT_MAX_PASSWORD_BYTES} bytes",
            field="password",
        )
    return password


def validate_profile_name(name: str | None) -> str:
    """Strip and validate a profile display name."""
    if name is None or not name.strip():
        raise ValidationError("Profile name is required", field="name")
    name = name.strip()
    max_length = get_account_limits().max_profile_name_length
    if len(name) > max_length:
        raise ValidationError(
            f"Profile name cannot exceed {max_length} characters",
            field="name",
        )
    return name

"""Format rules for user identity fields.

Checks run in a fixed order (username, email, password) and the first
failure is raised; callers never receive more than one error at a time.
"""

import re

from shared.exceptions import ValidationError
from users.domain.normalization import normalize

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 16
EMAIL_MAX_LENGTH = 30
PASSWORD_MIN_LENGTH = 8

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")


def validate_username(username: str | None) -> None:
    if not username or not username.strip():
        raise ValidationError("username", "Username is required")
    length = len(normalize(username))
    if length < USERNAME_MIN_LENGTH or length > USERNAME_MAX_LENGTH:
        raise ValidationError(
            "username",
            f"Username must be between {USERNAME_MIN_LENGTH} and "
            f"{USERNAME_MAX_LENGTH} characters",
        )


def validate_email(email: str | None) -> None:
    if not email or not email.strip():
        raise ValidationError("email", "Email is required")
    normalized = normalize(email)
    if not EMAIL_PATTERN.match(normalized):
        raise ValidationError("email", "Email must be valid")
    if len(normalized) > EMAIL_MAX_LENGTH:
        raise ValidationError(
            "email", f"Email must not exceed {EMAIL_MAX_LENGTH} characters"
        )


def validate_password(password: str | None) -> None:
    if not password:
        raise ValidationError("password", "Password is required")
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationError(
            "password",
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters",
        )


def validate_user_fields(
    username: str | None, email: str | None, password: str | None
) -> None:
    validate_username(username)
    validate_email(email)
    validate_password(password)

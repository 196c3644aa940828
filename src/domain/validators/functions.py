"""Business-rule validators for registration and password changes.

Each validator returns ``None`` when the value is acceptable, or the
ValidationError a handler should return as ``Failure``.

Usage:
    from src.domain.validators import check_password_strength

    if (error := check_password_strength(cmd.password)) is not None:
        return Failure(error=error)
"""

import re

from src.core.enums import ErrorCode
from src.core.errors import ValidationError
from src.domain.enums.token_purpose import RESET_IDENTIFIER_PREFIX
from src.domain.value_objects.password_strength import PasswordStrength

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]{3,20}$")
USERNAME_RULES_MESSAGE = (
    "Username must be 3-20 characters and contain only letters, numbers, "
    "and underscores"
)
RESERVED_EMAIL_MESSAGE = (
    f"Email addresses starting with '{RESET_IDENTIFIER_PREFIX}' cannot be registered"
)


def check_username(username: str) -> ValidationError | None:
    """Validate username format (3-20 letters, digits or underscores).

    Example:
        >>> check_username("ada_l") is None
        True
        >>> check_username("a!").code
        <ErrorCode.INVALID_USERNAME: 'invalid_username'>
    """
    if USERNAME_PATTERN.fullmatch(username):
        return None
    return ValidationError(
        code=ErrorCode.INVALID_USERNAME,
        message=USERNAME_RULES_MESSAGE,
        field="username",
    )


def check_password_strength(
    password: str, *, field: str = "password"
) -> ValidationError | None:
    """Reject passwords scoring below 3 of 4.

    The error message joins the feedback; details carry the score.
    """
    strength = PasswordStrength.evaluate(password)
    if strength.is_strong:
        return None
    return ValidationError(
        code=ErrorCode.PASSWORD_TOO_WEAK,
        message="; ".join(strength.feedback) or "Password is too weak",
        field=field,
        details={"score": str(strength.score)},
    )


def check_email(email: str) -> ValidationError | None:
    """Reject emails that collide with the password reset identifier space.

    Reset tokens are stored under ``reset_<email>``, so an account whose
    email already carries that prefix could pass its verification token off
    as a reset token for another account.

    Example:
        >>> check_email("ada@example.com") is None
        True
        >>> check_email("Reset_ada@example.com").code
        <ErrorCode.INVALID_EMAIL: 'invalid_email'>
    """
    if not email.lower().startswith(RESET_IDENTIFIER_PREFIX):
        return None
    return ValidationError(
        code=ErrorCode.INVALID_EMAIL,
        message=RESERVED_EMAIL_MESSAGE,
        field="email",
    )

"""Domain validators.

Usage:
    from src.domain.validators import check_password_strength, check_username
"""

from src.domain.validators.functions import (
    USERNAME_PATTERN,
    check_email,
    check_password_strength,
    check_username,
)

__all__ = [
    "USERNAME_PATTERN",
    "check_email",
    "check_password_strength",
    "check_username",
]

"""Authentication queries (CQRS read operations)."""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class ValidateResetToken:
    """Check a password reset token without consuming it.

    Lets the reset form refuse a dead link before the user types a new
    password.

    Attributes:
        token: Password reset token from the email link.
    """

    token: str

"""Authentication commands (CQRS write operations).

Commands represent user intent to change system state.
All commands are immutable (frozen=True) and use keyword-only arguments (kw_only=True).

Pattern:
- Commands are data containers (no logic)
- Handlers execute business logic
- Handlers return Result types
- Shape is validated by the request schemas; business rules (username
  format, password strength) are checked by the handlers
"""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class RegisterUser:
    """Register new member account.

    Creates a pending account and emails a verification link.

    Attributes:
        email: User's email address.
        username: Public handle (3-20 letters, digits or underscores).
        password: Plain text password (strength checked, then hashed).
        display_name: Optional name for greetings (defaults to username).

    Example:
        >>> command = RegisterUser(
        ...     email="ada@example.com",
        ...     username="ada_l",
        ...     password="Sn3aky!23",
        ... )
        >>> result = await handler.handle(command)
    """

    email: str
    username: str
    password: str
    display_name: str | None = None


@dataclass(frozen=True, kw_only=True)
class RequestPasswordReset:
    """Request a password reset link.

    Always answered with the same generic message (no user enumeration).

    Attributes:
        email: Email address of the account.
    """

    email: str


@dataclass(frozen=True, kw_only=True)
class ConfirmPasswordReset:
    """Set a new password using a reset token.

    Attributes:
        token: Password reset token from the email link.
        new_password: New plain text password (strength checked, then hashed).
    """

    token: str
    new_password: str


@dataclass(frozen=True, kw_only=True)
class VerifyEmail:
    """Prove ownership of the account email.

    Attributes:
        token: Verification token from the email link.
    """

    token: str


@dataclass(frozen=True, kw_only=True)
class ResendVerification:
    """Send a fresh verification link, superseding the previous one.

    Attributes:
        email: Email address of the pending account.
    """

    email: str

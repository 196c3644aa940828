"""Purposes served by the shared verification token store.

Email verification and password reset tokens live in the same table and are
told apart by identifier convention: verification tokens are stored under the
subject's email, reset tokens under ``reset_<email>``.
"""

from enum import Enum

RESET_IDENTIFIER_PREFIX = "reset_"


class TokenPurpose(str, Enum):
    """What a verification token proves once consumed."""

    EMAIL_VERIFICATION = "email_verification"
    PASSWORD_RESET = "password_reset"

    def to_identifier(self, subject: str) -> str:
        """Build the stored identifier for a subject (lower-cased email).

        Args:
            subject: Subject email address.

        Returns:
            Identifier under which tokens for this purpose are stored.

        Raises:
            ValueError: If a verification subject carries the reset prefix.

        Example:
            >>> TokenPurpose.PASSWORD_RESET.to_identifier("User@Example.com")
            'reset_user@example.com'
        """
        subject = subject.lower()
        if self is TokenPurpose.PASSWORD_RESET:
            return f"{RESET_IDENTIFIER_PREFIX}{subject}"
        if subject.startswith(RESET_IDENTIFIER_PREFIX):
            raise ValueError(
                f"Verification subject may not start with {RESET_IDENTIFIER_PREFIX!r}"
            )
        return subject

    def to_subject(self, identifier: str) -> str:
        """Recover the subject email from a stored identifier."""
        if self is TokenPurpose.PASSWORD_RESET and identifier.startswith(
            RESET_IDENTIFIER_PREFIX
        ):
            return identifier[len(RESET_IDENTIFIER_PREFIX) :]
        return identifier

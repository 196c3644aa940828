"""Verification token error.

Every validation or consumption failure of a verification token (never
existed, expired, already consumed, superseded) is reported with the same
code and message so callers cannot probe which case occurred.
"""

from dataclasses import dataclass

from src.core.enums import ErrorCode
from src.core.errors import DomainError

INVALID_OR_EXPIRED_MESSAGE = "Invalid or expired token"


@dataclass(frozen=True, slots=True, kw_only=True)
class TokenError(DomainError):
    """Token invalid or expired (cause deliberately not distinguished)."""

    @classmethod
    def invalid_or_expired(cls) -> "TokenError":
        """Build the single generic token failure."""
        return cls(code=ErrorCode.TOKEN_INVALID, message=INVALID_OR_EXPIRED_MESSAGE)

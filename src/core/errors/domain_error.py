"""Base domain error class for Railway-Oriented Programming.

DomainError is the base class for every expected failure in the service.
Errors flow through the system as data (inside ``Failure``), not exceptions.

Architecture:
- Does NOT inherit from Exception (never raised, returned in Result)
- Uses dataclass inheritance
- Type-safe with Result[T, DomainError]

Usage:
    from src.core.errors import DomainError

    @dataclass(frozen=True, slots=True, kw_only=True)
    class TokenError(DomainError):
        pass  # Inherits code, message, details
"""

from dataclasses import dataclass

from src.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Base domain error (does NOT inherit from Exception).

    Attributes:
        code: Machine-readable error code (enum).
        message: Human-readable error message, safe to show to API clients.
        details: Optional context for debugging (never shown to clients).
    """

    code: ErrorCode
    message: str
    details: dict[str, str] | None = None

    def __str__(self) -> str:
        """String representation of error."""
        return f"{self.code.value}: {self.message}"

"""VerificationTokenRepository protocol (port) for domain layer.

Email verification and password reset tokens share one store. The purpose
is encoded in the identifier: the lower-cased email for verification,
``reset_<email>`` for password reset.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


@dataclass(frozen=True, slots=True, kw_only=True)
class VerificationTokenData:
    """Data transfer object for a stored token.

    Used by protocol methods so that infrastructure model classes never
    reach the application layer.
    """

    identifier: str
    token: str
    expires: datetime


class VerificationTokenRepository(Protocol):
    """Protocol for verification token persistence operations.

    Token Lifecycle:
        1. Issued: prior tokens for the identifier are deleted, new row saved
        2. Validated: looked up by token, only while unexpired
        3. Consumed: the row and every other row for the identifier deleted
        4. Expired rows purged periodically

    Implementations:
        - VerificationTokenRepository (SQLAlchemy): src/infrastructure/persistence/repositories/
    """

    async def save(self, identifier: str, token: str, expires: datetime) -> None:
        """Persist a new token row."""
        ...

    async def find_unexpired(
        self, token: str, now: datetime
    ) -> VerificationTokenData | None:
        """Find a token whose expiry is still in the future.

        Args:
            token: Token string (unique across the store).
            now: Reference time; rows with expires <= now are ignored.
        """
        ...

    async def delete_by_identifier(self, identifier: str) -> int:
        """Delete every token for identifier. Returns the count deleted."""
        ...

    async def delete_unexpired(self, identifier: str, token: str, now: datetime) -> int:
        """Delete the (identifier, token) row if still unexpired.

        Returns:
            1 if the row was deleted, 0 if it was missing or expired.
        """
        ...

    async def delete_expired(self, now: datetime) -> int:
        """Delete every row with expires <= now. Returns the count deleted."""
        ...

"""VerificationTokenRepository - SQLAlchemy implementation for token persistence.

Expiry is always compared in SQL against a caller-supplied ``now`` so that
the same code works on PostgreSQL (aware timestamps) and SQLite (naive).
"""

from datetime import UTC, datetime

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.protocols.verification_token_repository import VerificationTokenData
from src.infrastructure.persistence.models.verification_token import (
    VerificationToken,
)

# Bulk deletes skip in-session evaluation: rows loaded from SQLite carry naive
# timestamps that cannot be compared with the aware reference time.
_NO_SYNC = {"synchronize_session": False}


def _to_data(model: VerificationToken) -> VerificationTokenData:
    """Convert database model to domain DTO."""
    expires = model.expires
    if expires.tzinfo is None:
        expires = expires.replace(tzinfo=UTC)
    return VerificationTokenData(
        identifier=model.identifier,
        token=model.token,
        expires=expires,
    )


class VerificationTokenRepository:
    """SQLAlchemy implementation for verification token persistence.

    Writes are flushed into the request transaction; Database.get_session
    commits them.

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with database.get_session() as session:
        ...     repo = VerificationTokenRepository(session)
        ...     data = await repo.find_unexpired("abc123...", now=utc_now())
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(self, identifier: str, token: str, expires: datetime) -> None:
        self.session.add(
            VerificationToken(identifier=identifier, token=token, expires=expires)
        )
        await self.session.flush()

    async def find_unexpired(
        self, token: str, now: datetime
    ) -> VerificationTokenData | None:
        """Find token if it has not yet expired.

        Args:
            token: Token string.
            now: Reference time.

        Returns:
            VerificationTokenData if found and unexpired, None otherwise.
        """
        stmt = select(VerificationToken).where(
            VerificationToken.token == token,
            VerificationToken.expires > now,
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_data(model) if model is not None else None

    async def delete_by_identifier(self, identifier: str) -> int:
        stmt = delete(VerificationToken).where(
            VerificationToken.identifier == identifier
        )
        result = await self.session.execute(stmt, execution_options=_NO_SYNC)
        return result.rowcount or 0

    async def delete_unexpired(self, identifier: str, token: str, now: datetime) -> int:
        """Delete (identifier, token) only while it is still valid.

        Returns:
            Number of rows deleted (0 or 1).
        """
        stmt = delete(VerificationToken).where(
            VerificationToken.identifier == identifier,
            VerificationToken.token == token,
            VerificationToken.expires > now,
        )
        result = await self.session.execute(stmt, execution_options=_NO_SYNC)
        return result.rowcount or 0

    async def delete_expired(self, now: datetime) -> int:
        stmt = delete(VerificationToken).where(VerificationToken.expires <= now)
        result = await self.session.execute(stmt, execution_options=_NO_SYNC)
        return result.rowcount or 0

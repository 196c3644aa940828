"""Verification token database model.

One table serves both email verification and password reset. The purpose is
carried by the identifier: the lower-cased email for verification tokens,
``reset_<email>`` for password reset tokens.

Security:
    - token: Random 32-byte hex string (unguessable, unique)
    - expires: Absolute expiry; expired rows are never honoured and are
      purged periodically
    - Single use: consuming a token deletes the row (and every other row
      for the same identifier)
"""

from datetime import datetime

from sqlalchemy import DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import Base


class VerificationToken(Base):
    """Single-use token row.

    Fields:
        identifier: Subject identifier (email or reset_<email>)
        token: Random hex string (unique)
        expires: Timestamp after which the token is invalid

    Keys and Indexes:
        - Primary key: (identifier, token)
        - token: unique
        - idx_verification_tokens_identifier: (identifier) for supersession
        - idx_verification_tokens_expires: (expires) for purges
    """

    __tablename__ = "verification_tokens"

    identifier: Mapped[str] = mapped_column(String(320), primary_key=True)

    token: Mapped[str] = mapped_column(String(128), primary_key=True, unique=True)

    expires: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("idx_verification_tokens_identifier", "identifier"),
        Index("idx_verification_tokens_expires", "expires"),
    )

    def __repr__(self) -> str:
        return (
            f"<VerificationToken(identifier={self.identifier!r}, "
            f"token={self.token[:8]!r}..., expires={self.expires})>"
        )

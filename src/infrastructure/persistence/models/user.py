"""User database model.

Security:
    - password_hash: NEVER stores plaintext passwords (bcrypt hashed)
    - password_hash is nullable: accounts created without a password
      (invited members) cannot request a password reset
    - email_verified_at: set once the member proves ownership of the email
"""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel


class User(BaseMutableModel):
    """User model for community accounts.

    Fields:
        id: UUID primary key (from BaseMutableModel)
        created_at / updated_at: Timestamps (from BaseMutableModel)
        email: Unique email address (lowercase, indexed)
        username: Unique handle (lowercase, indexed)
        display_name: Optional name shown in greetings
        password_hash: Bcrypt hash (nullable)
        role: member, staff, admin or owner
        status: pending_verification, active or banned
        email_verified_at: When the email was verified (nullable)

    Example:
        result = await session.execute(
            select(User).where(User.email == "user@example.com")
        )
        user = result.scalar_one_or_none()
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="User email address (unique, lowercase)",
    )

    username: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        unique=True,
        index=True,
        comment="Public handle (unique, lowercase, 3-20 word characters)",
    )

    display_name: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
        default=None,
    )

    password_hash: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        default=None,
        comment="Bcrypt hashed password (null for passwordless accounts)",
    )

    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="member",
    )

    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default="pending_verification",
        index=True,
    )

    email_verified_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    def __repr__(self) -> str:
        return (
            f"<User("
            f"id={self.id}, "
            f"username={self.username!r}, "
            f"status={self.status!r}"
            f")>"
        )

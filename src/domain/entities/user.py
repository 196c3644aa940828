"""User domain entity.

Pure business logic, no framework dependencies.

Lifecycle:
    pending_verification --(email verified)--> active
    pending_verification --(password reset, when configured)--> active
    any --(moderation)--> banned
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from src.domain.enums import UserRole, UserStatus


@dataclass
class User:
    """User domain entity.

    Attributes:
        id: Unique user identifier.
        email: Lower-cased email address (unique).
        username: Lower-cased public handle (unique).
        display_name: Name shown to other members and used in emails.
        password_hash: Bcrypt hash, None for accounts without a password.
        role: Community role.
        status: Account lifecycle status.
        email_verified_at: When the email address was proven, None if never.
        created_at: Timestamp when user was created.
        updated_at: Timestamp when user was last updated.

    Example:
        >>> user = User(id=uuid4(), email="user@example.com", username="user")
        >>> user.is_verified
        False
        >>> user.mark_email_verified()
        >>> user.status
        <UserStatus.ACTIVE: 'active'>
    """

    id: UUID
    email: str
    username: str
    display_name: str | None = None
    password_hash: str | None = None
    role: UserRole = UserRole.MEMBER
    status: UserStatus = UserStatus.PENDING_VERIFICATION
    email_verified_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_verified(self) -> bool:
        """Whether the email address has been proven."""
        return self.email_verified_at is not None

    @property
    def has_password(self) -> bool:
        """Whether the account can sign in (and reset) with a password."""
        return self.password_hash is not None

    @property
    def greeting_name(self) -> str:
        """Name used to address the user in emails."""
        return self.display_name or self.username or self.email

    def mark_email_verified(self, *, now: datetime | None = None) -> None:
        """Record proof of email ownership and activate the account.

        Args:
            now: Verification time (defaults to current UTC time).
        """
        now = now or datetime.now(UTC)
        self.email_verified_at = now
        if self.status == UserStatus.PENDING_VERIFICATION:
            self.status = UserStatus.ACTIVE
        self.updated_at = now

    def change_password(
        self,
        password_hash: str,
        *,
        activate: bool = False,
        now: datetime | None = None,
    ) -> None:
        """Replace the stored credential.

        Args:
            password_hash: New bcrypt hash.
            activate: Also treat the change as proof of email ownership
                (pending accounts become active and verified).
            now: Change time (defaults to current UTC time).
        """
        now = now or datetime.now(UTC)
        self.password_hash = password_hash
        if activate:
            if self.status == UserStatus.PENDING_VERIFICATION:
                self.status = UserStatus.ACTIVE
            if self.email_verified_at is None:
                self.email_verified_at = now
        self.updated_at = now

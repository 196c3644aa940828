"""UserRepository protocol for user persistence.

Port (interface) for hexagonal architecture.
Infrastructure layer implements this protocol.
"""

from typing import Protocol
from uuid import UUID

from src.domain.entities.user import User


class UserRepository(Protocol):
    """User repository protocol (port).

    Email and username are stored lower-case; lookups are case-insensitive.
    Writes are flushed into the request's transaction, which the session
    dependency commits once the handler returns.

    Methods:
        find_by_id: Retrieve user by ID
        find_by_email: Retrieve user by email
        find_by_username: Retrieve user by username
        exists_by_email / exists_by_username: Uniqueness checks
        save: Create new user
        update: Persist changes to an existing user
    """

    async def find_by_id(
        self, user_id: UUID, *, for_update: bool = False
    ) -> User | None:
        """Find user by ID.

        Cached reads are allowed unless ``for_update`` is set, which loads
        from the database and locks the row for the transaction.
        """
        ...

    async def find_by_email(
        self, email: str, *, for_update: bool = False
    ) -> User | None:
        """Find user by email address (case-insensitive).

        Load with ``for_update=True`` before mutating and calling ``update``.

        Example:
            >>> user = await repo.find_by_email("User@Example.com")
            >>> if user:
            ...     print(user.id)
        """
        ...

    async def find_by_username(self, username: str) -> User | None:
        """Find user by username (case-insensitive)."""
        ...

    async def exists_by_email(self, email: str) -> bool:
        """Check whether an account already uses this email."""
        ...

    async def exists_by_username(self, username: str) -> bool:
        """Check whether an account already uses this username."""
        ...

    async def save(self, user: User) -> None:
        """Create new user."""
        ...

    async def update(self, user: User) -> None:
        """Persist changes to an existing user.

        Raises:
            NoResultFound: If the user does not exist.
        """
        ...

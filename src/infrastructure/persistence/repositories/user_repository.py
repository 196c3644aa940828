"""UserRepository - SQLAlchemy implementation of UserRepository protocol.

Adapter for hexagonal architecture.
Maps between domain User entities and database UserModel, reading through
the users entity cache when one is supplied.
"""

from dataclasses import replace
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.user import User
from src.domain.enums import UserRole, UserStatus
from src.infrastructure.cache.entity_cache import EntityCache
from src.infrastructure.persistence.models.user import User as UserModel


class UserRepository:
    """SQLAlchemy implementation of UserRepository protocol.

    This class does NOT inherit from UserRepository protocol (Protocol uses
    structural typing). Writes are flushed, not committed: the request's
    session dependency owns the transaction.

    Cache:
        Lookups by id and by email are cached as ``user:<id>`` and
        ``user:email:<email>``, both tagged ``user:<id>`` so any write to the
        user drops every cached view of it. Cached entities are copied on the
        way in and out so callers never mutate the cached instance. The cache
        serves reads only: ``for_update`` lookups always hit the database.

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with database.get_session() as session:
        ...     repo = UserRepository(session, user_cache=caches.users)
        ...     user = await repo.find_by_email("user@example.com")
    """

    def __init__(
        self,
        session: AsyncSession,
        user_cache: EntityCache | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
            user_cache: Optional users entity cache.
        """
        self.session = session
        self._cache = user_cache

    async def find_by_id(
        self, user_id: UUID, *, for_update: bool = False
    ) -> User | None:
        if for_update:
            return await self._load_for_update(UserModel.id == user_id)
        cached = self._cache_get(str(user_id))
        if cached is not None:
            return cached

        stmt = select(UserModel).where(UserModel.id == user_id)
        result = await self.session.execute(stmt)
        user_model = result.scalar_one_or_none()
        if user_model is None:
            return None
        return self._remember(str(user_id), self._to_domain(user_model))

    async def find_by_email(
        self, email: str, *, for_update: bool = False
    ) -> User | None:
        """Find user by email address.

        Emails are stored lower-case, so the lookup lower-cases its input.
        With ``for_update`` the row is read from the database and locked for
        the rest of the transaction; use it for users about to be updated.
        """
        email = email.lower()
        if for_update:
            return await self._load_for_update(UserModel.email == email)
        cached = self._cache_get(f"email:{email}")
        if cached is not None:
            return cached

        stmt = select(UserModel).where(UserModel.email == email)
        result = await self.session.execute(stmt)
        user_model = result.scalar_one_or_none()
        if user_model is None:
            return None
        return self._remember(f"email:{email}", self._to_domain(user_model))

    async def find_by_username(self, username: str) -> User | None:
        stmt = select(UserModel).where(UserModel.username == username.lower())
        result = await self.session.execute(stmt)
        user_model = result.scalar_one_or_none()
        if user_model is None:
            return None
        return self._to_domain(user_model)

    async def exists_by_email(self, email: str) -> bool:
        stmt = select(func.count()).where(UserModel.email == email.lower())
        result = await self.session.execute(stmt)
        return result.scalar_one() > 0

    async def exists_by_username(self, username: str) -> bool:
        stmt = select(func.count()).where(UserModel.username == username.lower())
        result = await self.session.execute(stmt)
        return result.scalar_one() > 0

    async def save(self, user: User) -> None:
        """Create new user in database.

        Raises:
            IntegrityError: If email or username already exists.
        """
        self.session.add(self._to_model(user))
        await self.session.flush()
        self._forget(user.id)

    async def update(self, user: User) -> None:
        """Update existing user in database.

        Raises:
            NoResultFound: If user doesn't exist.
        """
        stmt = select(UserModel).where(UserModel.id == user.id)
        result = await self.session.execute(stmt)
        user_model = result.scalar_one()

        user_model.email = user.email
        user_model.username = user.username
        user_model.display_name = user.display_name
        user_model.password_hash = user.password_hash
        user_model.role = user.role.value
        user_model.status = user.status.value
        user_model.email_verified_at = user.email_verified_at
        user_model.updated_at = user.updated_at

        await self.session.flush()
        self._forget(user.id)

    async def _load_for_update(self, criterion) -> User | None:
        stmt = (
            select(UserModel)
            .where(criterion)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        user_model = result.scalar_one_or_none()
        return self._to_domain(user_model) if user_model is not None else None

    def _cache_get(self, entity_id: str) -> User | None:
        if self._cache is None:
            return None
        cached = self._cache.get(entity_id)
        return replace(cached) if cached is not None else None

    def _remember(self, entity_id: str, user: User) -> User:
        if self._cache is not None:
            self._cache.set(entity_id, replace(user), tags=[f"user:{user.id}"])
        return user

    def _forget(self, user_id: UUID) -> None:
        if self._cache is not None:
            self._cache.invalidate_by_tag(f"user:{user_id}")

    def _to_domain(self, user_model: UserModel) -> User:
        """Convert database model to domain entity."""
        return User(
            id=user_model.id,
            email=user_model.email,
            username=user_model.username,
            display_name=user_model.display_name,
            password_hash=user_model.password_hash,
            role=UserRole(user_model.role),
            status=UserStatus(user_model.status),
            email_verified_at=_as_utc(user_model.email_verified_at),
            created_at=_as_utc(user_model.created_at) or datetime.now(UTC),
            updated_at=_as_utc(user_model.updated_at) or datetime.now(UTC),
        )

    def _to_model(self, user: User) -> UserModel:
        """Convert domain entity to database model."""
        return UserModel(
            id=user.id,
            email=user.email.lower(),
            username=user.username.lower(),
            display_name=user.display_name,
            password_hash=user.password_hash,
            role=user.role.value,
            status=user.status.value,
            email_verified_at=user.email_verified_at,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


def _as_utc(value: datetime | None) -> datetime | None:
    """SQLite hands back naive datetimes; every stored value is UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value

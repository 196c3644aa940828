"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Logging (structlog console/JSON)
- Cache (in-process, tag-indexed) and entity caches
- Rate limiting (fixed window, memory or Redis)
- Database (PostgreSQL / SQLite in tests)
- Password hashing (bcrypt) and token generation
- Email (stub/AWS SES)
- Webhook notifications (Discord)
- Background cleanup job

Singletons are created lazily by ``@lru_cache`` factories; tests replace
them with ``app.dependency_overrides`` or reset them with ``cache_clear()``.
"""

from functools import lru_cache
from typing import TYPE_CHECKING, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from src.domain.protocols.cache_protocol import CacheProtocol
    from src.domain.protocols.email_protocol import EmailProtocol
    from src.domain.protocols.logger_protocol import LoggerProtocol
    from src.domain.protocols.notification_protocol import NotificationProtocol
    from src.domain.protocols.password_hashing_protocol import PasswordHashingProtocol
    from src.domain.protocols.token_generator_protocol import TokenGeneratorProtocol
    from src.infrastructure.cache.entity_cache import EntityCaches
    from src.infrastructure.jobs.cleanup_job import CacheCleanupJob
    from src.infrastructure.rate_limit.config import RateLimiters


# ============================================================================
# Logging (Application-Scoped)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection is centralized here (composition root):
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON, one event per line)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from src.infrastructure.logging.console_adapter import ConsoleAdapter

    return ConsoleAdapter(
        use_json=not settings.is_development,
        level=settings.log_level,
    )


# ============================================================================
# Cache (Application-Scoped)
# ============================================================================


@lru_cache()
def get_cache() -> "CacheProtocol":
    """Get cache singleton (app-scoped).

    Returns MemoryCache shared by the whole process. The cleanup job sweeps
    expired entries every CACHE_CLEANUP_INTERVAL_SECONDS.

    Returns:
        Cache implementing CacheProtocol.

    Usage:
        # Application Layer (direct use)
        cache = get_cache()
        cache.set("key", "value", ttl_seconds=60, tags=["group"])

        # Presentation Layer (FastAPI Depends)
        from fastapi import Depends
        cache: CacheProtocol = Depends(get_cache)
    """
    from src.infrastructure.cache import MemoryCache

    return MemoryCache(default_ttl_seconds=settings.cache_default_ttl_seconds)


@lru_cache()
def get_entity_caches() -> "EntityCaches":
    """Get the named entity caches (users, products, news) over get_cache()."""
    from src.infrastructure.cache import build_entity_caches

    return build_entity_caches(get_cache())


# ============================================================================
# Rate Limiting (Application-Scoped)
# ============================================================================


@lru_cache()
def get_rate_limiters() -> "RateLimiters":
    """Get rate limiter registry singleton (app-scoped).

    RATE_LIMIT_BACKEND selects the counter store:
    - memory: FixedWindowRateLimiter per preset (counters per process)
    - redis: RedisFixedWindowRateLimiter per preset (shared, atomic Lua)

    Fail-Open Design:
        Redis failures allow the request and log a warning. Rate limiting
        should NEVER cause denial of service.

    Returns:
        RateLimiters with the api, auth and webhook limiters.
    """
    from src.infrastructure.rate_limit import build_rate_limiters

    if settings.rate_limit_backend == "redis":
        from redis.asyncio import ConnectionPool, Redis

        pool = ConnectionPool.from_url(
            settings.redis_url,
            max_connections=20,
            decode_responses=False,
            socket_connect_timeout=5,
            socket_timeout=5,
            retry_on_timeout=True,
        )
        return build_rate_limiters(
            backend="redis",
            redis_client=Redis(connection_pool=pool),
            logger=get_logger(),
        )

    return build_rate_limiters(backend="memory")


# ============================================================================
# Database (Application-Scoped) and Sessions (Request-Scoped)
# ============================================================================


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Returns Database instance with connection pool.
    Use get_db_session() for per-request sessions.

    Returns:
        Database manager instance.
    """
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
    )


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session (request-scoped).

    Creates new session per request with automatic transaction management:
        - Commits on success
        - Rolls back on exception
        - Always closes session

    Yields:
        Database session for request duration.

    Usage:
        # Presentation Layer (FastAPI endpoint)
        from fastapi import Depends
        from sqlalchemy.ext.asyncio import AsyncSession

        @router.post("/users")
        async def create_user(
            session: AsyncSession = Depends(get_db_session)
        ):
            ...
    """
    db = get_database()
    async with db.get_session() as session:
        yield session


# ============================================================================
# Security Services (Application-Scoped)
# ============================================================================


@lru_cache()
def get_password_service() -> "PasswordHashingProtocol":
    """Get password hashing service singleton (app-scoped).

    Returns BcryptPasswordService with BCRYPT_ROUNDS cost factor.

    Returns:
        Password hashing service implementing PasswordHashingProtocol.
    """
    from src.infrastructure.security import BcryptPasswordService

    return BcryptPasswordService(cost_factor=settings.bcrypt_rounds)


@lru_cache()
def get_token_generator() -> "TokenGeneratorProtocol":
    """Get opaque token generator singleton (32 random bytes, hex)."""
    from src.infrastructure.security import SecureTokenGenerator

    return SecureTokenGenerator()


# ============================================================================
# Email Service (Application-Scoped)
# ============================================================================


@lru_cache()
def get_email_service() -> "EmailProtocol":
    """Get email service singleton (app-scoped).

    Container owns factory logic - decides which adapter based on
    EMAIL_BACKEND:
        - stub: StubEmailService (logs to console, development/testing)
        - ses: SESEmailService (real AWS SES)

    Returns:
        Email service implementing EmailProtocol.
    """
    sender = {
        "logger": get_logger(),
        "from_name": settings.email_from_name,
        "from_address": settings.email_from_address,
    }

    if settings.email_backend == "ses":
        from src.infrastructure.email import SESEmailService

        return SESEmailService(region=settings.aws_region, **sender)

    from src.infrastructure.email import StubEmailService

    return StubEmailService(**sender)


# ============================================================================
# Notifications (Application-Scoped)
# ============================================================================


@lru_cache()
def get_notifier() -> "NotificationProtocol":
    """Get webhook notifier singleton (app-scoped).

    Returns DiscordWebhookService. Without DISCORD_WEBHOOK_ENABLED every
    notification is a logged no-op returning False.
    """
    from src.infrastructure.notifications import DiscordWebhookService

    return DiscordWebhookService(
        logger=get_logger(),
        enabled=settings.discord_webhook_enabled,
        webhook_url=settings.discord_webhook_url,
        audit_webhook_url=settings.discord_audit_webhook_url,
        timeout=settings.webhook_timeout_seconds,
    )


# ============================================================================
# Background Jobs (Application-Scoped)
# ============================================================================


async def purge_expired_tokens() -> int:
    """Delete expired verification tokens in a session of their own.

    Returns:
        Number of token rows removed.
    """
    from src.application.services.token_lifecycle_service import (
        TokenLifecycleService,
    )
    from src.infrastructure.persistence.repositories import (
        VerificationTokenRepository,
    )

    async with get_database().get_session() as session:
        service = TokenLifecycleService(
            VerificationTokenRepository(session=session),
            get_token_generator(),
            logger=get_logger(),
        )
        return await service.purge_expired()


@lru_cache()
def get_cleanup_job() -> "CacheCleanupJob":
    """Get the cache/limiter/token cleanup job singleton.

    Started and stopped by the application lifespan (src/main.py).
    """
    from src.infrastructure.jobs import CacheCleanupJob

    return CacheCleanupJob(
        get_cache(),
        get_rate_limiters(),
        logger=get_logger(),
        token_purger=purge_expired_tokens,
        interval_seconds=settings.cache_cleanup_interval_seconds,
        purge_interval_seconds=settings.token_purge_interval_seconds,
    )

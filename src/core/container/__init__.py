"""Container module - Centralized dependency injection.

This module re-exports all factory functions from submodules:

    from src.core.container import get_cache, get_register_user_handler, ...

The container is organized into modules by concern:
- infrastructure: Core services (logging, cache, rate limiting, db, email,
  notifications, cleanup job)
- auth_handlers: Account flow handler factories
"""

# Infrastructure services
from src.core.container.infrastructure import (
    get_cache,
    get_cleanup_job,
    get_database,
    get_db_session,
    get_email_service,
    get_entity_caches,
    get_logger,
    get_notifier,
    get_password_service,
    get_rate_limiters,
    get_token_generator,
    purge_expired_tokens,
)

# Auth handlers
from src.core.container.auth_handlers import (
    get_confirm_password_reset_handler,
    get_register_user_handler,
    get_request_password_reset_handler,
    get_resend_verification_handler,
    get_validate_reset_token_handler,
    get_verify_email_handler,
)

__all__ = [
    # Infrastructure
    "get_cache",
    "get_cleanup_job",
    "get_database",
    "get_db_session",
    "get_email_service",
    "get_entity_caches",
    "get_logger",
    "get_notifier",
    "get_password_service",
    "get_rate_limiters",
    "get_token_generator",
    "purge_expired_tokens",
    # Auth handlers
    "get_confirm_password_reset_handler",
    "get_register_user_handler",
    "get_request_password_reset_handler",
    "get_resend_verification_handler",
    "get_validate_reset_token_handler",
    "get_verify_email_handler",
]

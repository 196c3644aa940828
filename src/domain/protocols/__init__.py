"""Domain protocols (ports) package.

This package contains protocol definitions that the domain layer needs.
Infrastructure adapters implement these protocols without inheritance.

Re-exports are ONLY for protocols defined in this package.

Usage:
    from src.domain.protocols import CacheProtocol, RateLimiterProtocol
    from src.domain.protocols import UserRepository, VerificationTokenRepository
"""

# Service protocols
from src.domain.protocols.cache_protocol import CacheProtocol, CacheStats
from src.domain.protocols.email_protocol import EmailProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.notification_protocol import NotificationProtocol
from src.domain.protocols.password_hashing_protocol import PasswordHashingProtocol
from src.domain.protocols.rate_limit_protocol import (
    RateLimitedRequest,
    RateLimiterProtocol,
)
from src.domain.protocols.token_generator_protocol import TokenGeneratorProtocol

# Repository protocols
from src.domain.protocols.user_repository import UserRepository
from src.domain.protocols.verification_token_repository import (
    VerificationTokenData,
    VerificationTokenRepository,
)

__all__ = [
    # Service protocols
    "CacheProtocol",
    "CacheStats",
    "EmailProtocol",
    "LoggerProtocol",
    "NotificationProtocol",
    "PasswordHashingProtocol",
    "RateLimitedRequest",
    "RateLimiterProtocol",
    "TokenGeneratorProtocol",
    # Repository protocols
    "UserRepository",
    "VerificationTokenData",
    "VerificationTokenRepository",
]

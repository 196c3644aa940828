"""Rate limit infrastructure adapters.

Exports:
    FixedWindowRateLimiter: In-process fixed-window limiter.
    RedisFixedWindowRateLimiter: Shared fixed-window limiter (atomic Lua).
    RateLimiters / build_rate_limiters: Preset registry (api, auth, webhook).
    get_client_ip: Client address resolution (X-Forwarded-For aware).
"""

from src.infrastructure.rate_limit.config import (
    API_RULE,
    AUTH_RULE,
    WEBHOOK_RULE,
    RateLimiters,
    build_rate_limiters,
)
from src.infrastructure.rate_limit.fixed_window import (
    FixedWindowRateLimiter,
    RateLimitRecord,
)
from src.infrastructure.rate_limit.keys import get_client_ip, prefixed_ip_key
from src.infrastructure.rate_limit.redis_fixed_window import (
    RedisFixedWindowRateLimiter,
)

__all__ = [
    "API_RULE",
    "AUTH_RULE",
    "WEBHOOK_RULE",
    "FixedWindowRateLimiter",
    "RateLimitRecord",
    "RateLimiters",
    "RedisFixedWindowRateLimiter",
    "build_rate_limiters",
    "get_client_ip",
    "prefixed_ip_key",
]

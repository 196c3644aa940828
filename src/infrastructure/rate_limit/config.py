"""Rate limit presets and the limiter registry.

Presets:
    api      100 requests per 15 minutes, keyed rate-limit:<ip>
    auth     5 requests per 15 minutes, keyed auth:<ip>
    webhook  10 requests per minute, keyed rate-limit:<ip>

Usage:
    from src.core.container import get_rate_limiters

    limiters = get_rate_limiters()
    result = await limiters.auth.check(request)
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from src.domain.value_objects.rate_limit_rule import FixedWindowRule
from src.infrastructure.rate_limit.fixed_window import FixedWindowRateLimiter
from src.infrastructure.rate_limit.redis_fixed_window import (
    RedisFixedWindowRateLimiter,
)

if TYPE_CHECKING:
    from src.core.clock import Clock
    from src.domain.protocols.logger_protocol import LoggerProtocol
    from src.domain.protocols.rate_limit_protocol import RateLimiterProtocol

API_RULE = FixedWindowRule(name="api", max_requests=100, window_seconds=15 * 60)
AUTH_RULE = FixedWindowRule(
    name="auth", max_requests=5, window_seconds=15 * 60, key_prefix="auth"
)
WEBHOOK_RULE = FixedWindowRule(name="webhook", max_requests=10, window_seconds=60)


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimiters:
    """The process-wide limiter for each preset."""

    api: RateLimiterProtocol
    auth: RateLimiterProtocol
    webhook: RateLimiterProtocol

    def __iter__(self) -> Iterator[RateLimiterProtocol]:
        return iter((self.api, self.auth, self.webhook))


def build_rate_limiters(
    *,
    backend: str = "memory",
    redis_client: Any = None,
    logger: LoggerProtocol | None = None,
    clock: Clock | None = None,
) -> RateLimiters:
    """Create the preset limiters on the chosen backend.

    Args:
        backend: "memory" (per process) or "redis" (shared).
        redis_client: Async Redis client, required for the redis backend.
        logger: Logger for fail-open warnings, required for the redis backend.
        clock: Optional time source for every limiter.

    Raises:
        ValueError: If the redis backend is requested without a client or
            logger, or the backend is unknown.
    """
    rules = {"api": API_RULE, "auth": AUTH_RULE, "webhook": WEBHOOK_RULE}

    if backend == "memory":
        return RateLimiters(
            **{
                name: FixedWindowRateLimiter(rule, clock=clock)
                for name, rule in rules.items()
            }
        )

    if backend == "redis":
        if redis_client is None or logger is None:
            raise ValueError("redis backend requires redis_client and logger")
        return RateLimiters(
            **{
                name: RedisFixedWindowRateLimiter(
                    rule, redis_client=redis_client, logger=logger, clock=clock
                )
                for name, rule in rules.items()
            }
        )

    raise ValueError(f"Unknown rate limit backend: {backend}")

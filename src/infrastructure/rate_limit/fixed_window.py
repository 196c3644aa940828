"""In-process fixed-window rate limiter.

Counts requests per identity in a plain dict of windows. Every check first
purges windows that have ended, then either opens a new window or counts
against the current one.

Concurrency:
    check() and hit() never await while touching the map, so each call is
    atomic under the single-threaded event loop. Counters are per process;
    multi-instance deployments use RedisFixedWindowRateLimiter instead.

Usage:
    from src.infrastructure.rate_limit.config import AUTH_RULE

    limiter = FixedWindowRateLimiter(AUTH_RULE)
    result = await limiter.check(request)
    if not result.success:
        ...  # 429
"""

from dataclasses import dataclass
from datetime import datetime

from src.core.clock import Clock, utc_now
from src.domain.protocols.rate_limit_protocol import RateLimitedRequest
from src.domain.value_objects.rate_limit_rule import FixedWindowRule, RateLimitResult
from src.infrastructure.rate_limit.keys import KeyGenerator, prefixed_ip_key


@dataclass(slots=True)
class RateLimitRecord:
    """Counter state of one identity's current window."""

    count: int
    reset_time: datetime


class FixedWindowRateLimiter:
    """Fixed-window limiter implementing RateLimiterProtocol.

    Note: Does NOT inherit from RateLimiterProtocol (uses structural typing).

    Args:
        rule: Limit and window length.
        key_generator: Maps a request to its identity
            (default: ``<rule.key_prefix>:<client ip>``).
        clock: Time source (defaults to current UTC time).
    """

    def __init__(
        self,
        rule: FixedWindowRule,
        key_generator: KeyGenerator | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.rule = rule
        self._key_generator = key_generator or prefixed_ip_key(rule.key_prefix)
        self._clock = clock or utc_now
        self._records: dict[str, RateLimitRecord] = {}

    def key_for(self, request: RateLimitedRequest) -> str:
        return self._key_generator(request)

    async def check(self, request: RateLimitedRequest) -> RateLimitResult:
        """Count request against its identity."""
        return self._consume(self.key_for(request))

    async def hit(self, key: str) -> RateLimitResult:
        """Count one request against a precomputed identity."""
        return self._consume(key)

    async def reset(self, key: str) -> bool:
        return self._records.pop(key, None) is not None

    def cleanup(self) -> int:
        """Purge windows that have ended. Returns the count removed."""
        return self._purge_expired(self._clock())

    def _consume(self, key: str) -> RateLimitResult:
        now = self._clock()
        self._purge_expired(now)

        record = self._records.get(key)
        if record is None or now > record.reset_time:
            record = RateLimitRecord(count=1, reset_time=now + self.rule.window)
            self._records[key] = record
            return self._result(True, self.rule.max_requests - 1, record)

        if record.count >= self.rule.max_requests:
            return self._result(False, 0, record)

        record.count += 1
        return self._result(True, self.rule.max_requests - record.count, record)

    def _purge_expired(self, now: datetime) -> int:
        expired = [key for key, rec in self._records.items() if now > rec.reset_time]
        for key in expired:
            del self._records[key]
        return len(expired)

    def _result(
        self, success: bool, remaining: int, record: RateLimitRecord
    ) -> RateLimitResult:
        return RateLimitResult(
            success=success,
            remaining=remaining,
            reset_time=record.reset_time,
            limit=self.rule.max_requests,
        )

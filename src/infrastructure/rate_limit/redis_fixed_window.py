"""Redis-backed fixed-window rate limiter using an atomic Lua script.

Shares counters across every API instance pointing at the same Redis. The
check-and-increment runs as one EVALSHA call, so concurrent requests from
different processes can never both take the last slot of a window.

Fail-open policy:
    Any Redis failure allows the request (remaining = limit) and logs a
    warning. Rate limiting must never turn into a denial of service.
"""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta
from functools import partial
from pathlib import Path
from typing import TYPE_CHECKING, Any

from redis.exceptions import RedisError

from src.core.clock import Clock, utc_now
from src.domain.value_objects.rate_limit_rule import FixedWindowRule, RateLimitResult
from src.infrastructure.rate_limit.keys import KeyGenerator, prefixed_ip_key

if TYPE_CHECKING:
    from src.domain.protocols.logger_protocol import LoggerProtocol
    from src.domain.protocols.rate_limit_protocol import RateLimitedRequest

KEY_NAMESPACE = "ratelimit"


class RedisFixedWindowRateLimiter:
    """Fixed-window limiter implementing RateLimiterProtocol over Redis.

    Args:
        rule: Limit and window length.
        redis_client: Async Redis client (redis.asyncio.Redis compatible).
        logger: Structured logger for fail-open warnings.
        key_generator: Maps a request to its identity
            (default: ``<rule.key_prefix>:<client ip>``).
        clock: Time source (defaults to current UTC time).

    Redis keys:
        ``ratelimit:<rule name>:<identity>`` hash with fields count and reset
        (epoch milliseconds), expiring shortly after the window ends.
    """

    def __init__(
        self,
        rule: FixedWindowRule,
        *,
        redis_client: Any,
        logger: LoggerProtocol,
        key_generator: KeyGenerator | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.rule = rule
        self.redis = redis_client
        self._logger = logger
        self._key_generator = key_generator or prefixed_ip_key(rule.key_prefix)
        self._clock = clock or utc_now
        self._script_sha: str | None = None
        self._script_lock = asyncio.Lock()

    def key_for(self, request: RateLimitedRequest) -> str:
        return self._key_generator(request)

    async def check(self, request: RateLimitedRequest) -> RateLimitResult:
        return await self.hit(self.key_for(request))

    async def hit(self, key: str) -> RateLimitResult:
        """Atomically count one request against key.

        Returns:
            RateLimitResult from the script, or an allowing result when
            Redis is unavailable.
        """
        now = self._clock()
        now_ms = int(now.timestamp() * 1000)
        try:
            sha = await self._ensure_script()
            resp = await self.redis.evalsha(
                sha,
                1,
                self._redis_key(key),
                self.rule.max_requests,
                self.rule.window_ms,
                now_ms,
            )
            allowed, remaining, reset_ms = (int(v) for v in resp)
            return RateLimitResult(
                success=bool(allowed),
                remaining=remaining,
                reset_time=datetime.fromtimestamp(reset_ms / 1000, tz=UTC),
                limit=self.rule.max_requests,
            )
        except (RedisError, OSError) as e:
            self._logger.warning(
                "Rate limit store unavailable, failing open",
                rule=self.rule.name,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return RateLimitResult(
                success=True,
                remaining=self.rule.max_requests,
                reset_time=now + timedelta(seconds=self.rule.window_seconds),
                limit=self.rule.max_requests,
            )

    async def reset(self, key: str) -> bool:
        """Delete key's window. Unlike checks, errors propagate."""
        deleted = await self.redis.delete(self._redis_key(key))
        return bool(deleted)

    def cleanup(self) -> int:
        """Windows expire through Redis key TTLs; nothing to sweep locally."""
        return 0

    def _redis_key(self, key: str) -> str:
        return f"{KEY_NAMESPACE}:{self.rule.name}:{key}"

    async def _ensure_script(self) -> str:
        """Load the Lua script into Redis once and cache its SHA."""
        if self._script_sha:
            return self._script_sha
        async with self._script_lock:
            if self._script_sha:
                return self._script_sha
            script = await _read_lua_script("lua_scripts/fixed_window.lua")
            sha: str = await self.redis.script_load(script)
            self._script_sha = sha
            return sha


def _read_lua_script_sync(path: Path) -> str:
    return path.read_text(encoding="utf-8")


async def _read_lua_script(rel_path: str) -> str:
    """Read a Lua script relative to this module without blocking the loop."""
    full_path = Path(__file__).parent / rel_path
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, partial(_read_lua_script_sync, full_path))

"""Periodic sweep of expired in-process state.

Runs inside the API process as a single asyncio task started by the
application lifespan:

- every ``interval_seconds``: ``cache.cleanup()`` and ``cleanup()`` on each
  rate limiter (in-memory limiters drop expired windows, Redis limiters
  return 0 because keys expire server side)
- every ``purge_interval_seconds``: expired verification token rows are
  deleted through ``token_purger``

Errors from a sweep are logged and the loop keeps going; cancellation stops
the task at the next await.
"""

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError

from src.domain.protocols import CacheProtocol, LoggerProtocol, RateLimiterProtocol

type TokenPurger = Callable[[], Awaitable[int]]


@dataclass(frozen=True, slots=True, kw_only=True)
class CleanupReport:
    """Entries removed by one sweep."""

    cache_entries: int
    rate_limit_records: int
    expired_tokens: int = 0

    @property
    def total(self) -> int:
        return self.cache_entries + self.rate_limit_records + self.expired_tokens


class CacheCleanupJob:
    """Background task sweeping the cache, limiters and token store.

    Usage:
        job = CacheCleanupJob(cache, limiters, token_purger=purge, logger=logger)
        job.start()
        ...
        await job.stop()
    """

    def __init__(
        self,
        cache: CacheProtocol,
        limiters: Iterable[RateLimiterProtocol],
        *,
        logger: LoggerProtocol,
        token_purger: TokenPurger | None = None,
        interval_seconds: float = 60,
        purge_interval_seconds: float = 3600,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._cache = cache
        self._limiters = tuple(limiters)
        self._logger = logger
        self._token_purger = token_purger
        self._interval = interval_seconds
        self._purge_every = max(1, int(purge_interval_seconds // interval_seconds))
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self, *, purge_tokens: bool = False) -> CleanupReport:
        """Run a single sweep.

        Args:
            purge_tokens: Also delete expired verification tokens.

        Returns:
            CleanupReport with the number of entries removed per store.
        """
        cache_entries = self._cache.cleanup()
        rate_limit_records = sum(limiter.cleanup() for limiter in self._limiters)

        expired_tokens = 0
        if purge_tokens and self._token_purger is not None:
            expired_tokens = await self._token_purger()

        report = CleanupReport(
            cache_entries=cache_entries,
            rate_limit_records=rate_limit_records,
            expired_tokens=expired_tokens,
        )
        if report.total > 0:
            self._logger.info(
                "Expired entries removed",
                cache_entries=report.cache_entries,
                rate_limit_records=report.rate_limit_records,
                expired_tokens=report.expired_tokens,
            )
        return report

    def start(self) -> None:
        """Schedule the sweep loop on the running event loop (idempotent)."""
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="cache-cleanup")
        self._logger.info(
            "Cleanup job started",
            interval_seconds=self._interval,
            purge_every_ticks=self._purge_every,
        )

    async def stop(self) -> None:
        """Cancel the sweep loop and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        self._logger.info("Cleanup job stopped")

    async def _run(self) -> None:
        tick = 0
        while True:
            await asyncio.sleep(self._interval)
            tick += 1
            try:
                await self.run_once(purge_tokens=tick % self._purge_every == 0)
            except (SQLAlchemyError, OSError) as e:
                self._logger.error("Cleanup sweep failed", error=e)

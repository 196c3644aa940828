"""Unit tests for CacheCleanupJob."""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest
from sqlalchemy.exc import OperationalError

from src.infrastructure.cache import MemoryCache
from src.infrastructure.jobs import CacheCleanupJob, CleanupReport
from src.infrastructure.rate_limit import build_rate_limiters


@pytest.fixture
def cache(clock):
    return MemoryCache(clock=clock)


@pytest.fixture
def limiters(clock):
    return build_rate_limiters(backend="memory", clock=clock)


@pytest.mark.unit
class TestCacheCleanupJobSweep:
    @pytest.mark.asyncio
    async def test_run_once_sweeps_cache_and_limiters(self, cache, limiters, clock):
        cache.set("short", 1, ttl_seconds=5)
        cache.set("long", 2, ttl_seconds=600)
        await limiters.webhook.hit("rate-limit:10.0.0.5")
        await limiters.api.hit("rate-limit:10.0.0.5")
        logger = Mock()
        job = CacheCleanupJob(cache, limiters, logger=logger)

        clock.advance(seconds=61)
        report = await job.run_once()

        # Webhook window (60s) ended, api window (15 min) still open
        assert report == CleanupReport(cache_entries=1, rate_limit_records=1)
        assert report.total == 2
        logger.info.assert_called_once()

    @pytest.mark.asyncio
    async def test_tokens_purged_only_when_requested(self, cache, limiters):
        purger = AsyncMock(return_value=3)
        job = CacheCleanupJob(cache, limiters, logger=Mock(), token_purger=purger)

        assert (await job.run_once()).expired_tokens == 0
        assert (await job.run_once(purge_tokens=True)).expired_tokens == 3
        purger.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_nothing_removed_logs_nothing(self, cache, limiters):
        logger = Mock()
        job = CacheCleanupJob(cache, limiters, logger=logger)

        report = await job.run_once()

        assert report.total == 0
        logger.info.assert_not_called()

    def test_interval_must_be_positive(self, cache, limiters):
        with pytest.raises(ValueError):
            CacheCleanupJob(cache, limiters, logger=Mock(), interval_seconds=0)


@pytest.mark.unit
class TestCacheCleanupJobLifecycle:
    @pytest.mark.asyncio
    async def test_start_and_stop(self, cache, limiters):
        purger = AsyncMock(return_value=0)
        job = CacheCleanupJob(
            cache,
            limiters,
            logger=Mock(),
            token_purger=purger,
            interval_seconds=0.01,
            purge_interval_seconds=0.02,
        )

        job.start()
        job.start()
        assert job.running is True
        await asyncio.sleep(0.1)
        await job.stop()

        assert job.running is False
        assert purger.await_count >= 1

    @pytest.mark.asyncio
    async def test_sweep_errors_logged_and_loop_continues(self, cache, limiters):
        purger = AsyncMock(side_effect=OperationalError("DELETE", {}, Exception("db down")))
        logger = Mock()
        job = CacheCleanupJob(
            cache,
            limiters,
            logger=logger,
            token_purger=purger,
            interval_seconds=0.01,
            purge_interval_seconds=0.01,
        )

        job.start()
        await asyncio.sleep(0.1)
        assert job.running is True
        await job.stop()

        assert purger.await_count >= 2
        logger.error.assert_called()

    @pytest.mark.asyncio
    async def test_stop_without_start_is_noop(self, cache, limiters):
        job = CacheCleanupJob(cache, limiters, logger=Mock())

        await job.stop()

        assert job.running is False

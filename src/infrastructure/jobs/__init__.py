"""Background jobs running inside the API process.

Usage:
    from src.core.container import get_cleanup_job

    job = get_cleanup_job()
    job.start()
"""

from src.infrastructure.jobs.cleanup_job import CacheCleanupJob, CleanupReport

__all__ = ["CacheCleanupJob", "CleanupReport"]

"""In-process TTL cache with tag-based invalidation.

This adapter implements CacheProtocol with two plain dicts: one holding
entries, one indexing keys by tag. Entries carry an absolute expiry and are
evicted lazily on read or in bulk by cleanup().

Architecture:
- Implements CacheProtocol without inheritance (structural typing)
- No awaits inside key operations, so each call is atomic on the event loop
- Injectable clock for deterministic expiry in tests
- One instance per process, created by src.core.container.get_cache()
"""

from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from src.core.clock import Clock, utc_now
from src.domain.protocols.cache_protocol import CacheStats

DEFAULT_TTL_SECONDS = 300


@dataclass(slots=True)
class CacheEntry:
    """Stored value with its absolute expiry and tag registrations."""

    data: Any
    expires_at: datetime
    tags: frozenset[str] = field(default_factory=frozenset)

    def is_expired(self, now: datetime) -> bool:
        """An entry is live up to and including its expiry instant."""
        return now > self.expires_at


class MemoryCache:
    """Process-local implementation of CacheProtocol.

    Note: Does NOT inherit from CacheProtocol (uses structural typing).

    Attributes:
        _entries: Key to CacheEntry map.
        _tag_index: Tag to set of keys; never holds an empty set.
        _clock: Time source returning aware UTC datetimes.

    Example:
        >>> cache = MemoryCache()
        >>> cache.set("user:42", {"name": "Ada"}, ttl_seconds=900, tags=["users"])
        >>> cache.get("user:42")
        {'name': 'Ada'}
        >>> cache.invalidate_by_tag("users")
        1
    """

    def __init__(
        self,
        *,
        default_ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Clock | None = None,
    ) -> None:
        """Initialize an empty cache.

        Args:
            default_ttl_seconds: TTL used when set() is called without one.
            clock: Time source (defaults to current UTC time).
        """
        self._entries: dict[str, CacheEntry] = {}
        self._tag_index: dict[str, set[str]] = {}
        self._default_ttl_seconds = default_ttl_seconds
        self._clock = clock or utc_now

    def get(self, key: str) -> Any | None:
        """Return the cached value, or None when missing or expired.

        Expired entries are evicted on the spot.
        """
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            self._remove(key)
            return None
        return entry.data

    def set(
        self,
        key: str,
        value: Any,
        ttl_seconds: float | None = None,
        tags: Iterable[str] | None = None,
    ) -> None:
        """Store value under key until now + ttl_seconds.

        Replaces any previous entry for key, including its tag registrations.
        A non-positive TTL stores an entry that is already expired.
        """
        ttl = self._default_ttl_seconds if ttl_seconds is None else ttl_seconds
        if key in self._entries:
            self._remove(key)

        entry = CacheEntry(
            data=value,
            expires_at=self._clock() + timedelta(seconds=ttl),
            tags=frozenset(tags or ()),
        )
        self._entries[key] = entry
        for tag in entry.tags:
            self._tag_index.setdefault(tag, set()).add(key)

    def delete(self, key: str) -> bool:
        """Remove key. Returns True if an entry (live or expired) existed."""
        return self._remove(key)

    def invalidate_by_tag(self, tag: str) -> int:
        """Remove every key registered under tag.

        Returns:
            Number of entries removed (0 for an unknown tag).
        """
        keys = self._tag_index.get(tag)
        if not keys:
            return 0
        removed = 0
        for key in list(keys):
            if self._remove(key):
                removed += 1
        return removed

    def invalidate(self, key_or_tag: str, is_tag: bool = False) -> int:
        """Remove a single key, or every key under a tag when is_tag is set."""
        if is_tag:
            return self.invalidate_by_tag(key_or_tag)
        return 1 if self._remove(key_or_tag) else 0

    def cleanup(self) -> int:
        """Sweep every expired entry.

        Returns:
            Number of entries removed.
        """
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            self._remove(key)
        return len(expired)

    def clear(self) -> None:
        """Drop all entries and tags."""
        self._entries.clear()
        self._tag_index.clear()

    def size(self) -> int:
        """Number of stored entries, expired ones included."""
        return len(self._entries)

    def get_stats(self) -> CacheStats:
        """Snapshot of entry counts. Does not evict anything."""
        now = self._clock()
        expired = sum(1 for entry in self._entries.values() if entry.is_expired(now))
        total = len(self._entries)
        return CacheStats(
            total=total,
            active=total - expired,
            expired=expired,
            tags=len(self._tag_index),
        )

    async def get_or_set(
        self,
        key: str,
        fetcher: Callable[[], Awaitable[Any]],
        ttl_seconds: float | None = None,
        tags: Iterable[str] | None = None,
    ) -> Any:
        """Read-through helper.

        Returns the cached value when present; otherwise awaits fetcher,
        caches a non-None result and returns it.
        """
        cached = self.get(key)
        if cached is not None:
            return cached
        value = await fetcher()
        if value is not None:
            self.set(key, value, ttl_seconds=ttl_seconds, tags=tags)
        return value

    def _remove(self, key: str) -> bool:
        entry = self._entries.pop(key, None)
        if entry is None:
            return False
        for tag in entry.tags:
            keys = self._tag_index.get(tag)
            if keys is None:
                continue
            keys.discard(key)
            if not keys:
                del self._tag_index[tag]
        return True

"""Cache protocol for domain layer.

Defines the in-process, tag-indexed TTL cache the application reads through.
The cache is never a source of truth: a miss only means "go to the
database", and no operation fails.

Architecture:
- Protocol-based (structural typing)
- Synchronous key operations (no I/O, nothing to await)
- Async read-through helper for loaders that hit the database
"""

from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True, slots=True, kw_only=True)
class CacheStats:
    """Point-in-time cache statistics.

    Attributes:
        total: Entries currently stored (expired ones not yet swept included).
        active: Entries that would still be returned by get().
        expired: Entries past their expiry awaiting lazy eviction or cleanup.
        tags: Number of tags with at least one registered key.
    """

    total: int
    active: int
    expired: int
    tags: int


class CacheProtocol(Protocol):
    """In-process key-value cache with absolute expiry and tag invalidation.

    Invariants:
        - get() never returns an entry whose expiry has passed.
        - A key is registered under a tag iff its current entry carries it.
        - Tags with no keys are pruned immediately.
    """

    def get(self, key: str) -> Any | None:
        """Return the cached value, or None when missing or expired."""
        ...

    def set(
        self,
        key: str,
        value: Any,
        ttl_seconds: float | None = None,
        tags: Iterable[str] | None = None,
    ) -> None:
        """Store value until now + ttl_seconds (default TTL when None).

        Replaces any prior entry for key and its tag registrations.
        """
        ...

    def delete(self, key: str) -> bool:
        """Remove a key. Returns True if it was present."""
        ...

    def invalidate_by_tag(self, tag: str) -> int:
        """Remove every key registered under tag. Returns the count removed."""
        ...

    def invalidate(self, key_or_tag: str, is_tag: bool = False) -> int:
        """Remove a single key or a whole tag group."""
        ...

    def cleanup(self) -> int:
        """Sweep expired entries. Returns the count removed."""
        ...

    def clear(self) -> None:
        """Drop every entry and tag."""
        ...

    def size(self) -> int:
        """Return the number of stored entries (expired included)."""
        ...

    def get_stats(self) -> CacheStats:
        """Return current statistics without mutating the cache."""
        ...

    async def get_or_set(
        self,
        key: str,
        fetcher: Callable[[], Awaitable[Any]],
        ttl_seconds: float | None = None,
        tags: Iterable[str] | None = None,
    ) -> Any:
        """Return the cached value or await fetcher, store and return it.

        A fetcher result of None is returned but not cached.
        """
        ...

"""Cache infrastructure package.

All cache instances are managed through src.core.container.

Architecture:
- MemoryCache: In-process implementation of CacheProtocol
- EntityCache: Per-entity key pattern, TTL and group tag
- memoize_with_ttl: Read-through wrapper for async loaders
"""

from src.infrastructure.cache.entity_cache import (
    EntityCache,
    EntityCaches,
    build_entity_caches,
)
from src.infrastructure.cache.memoize import default_cache_key, memoize_with_ttl
from src.infrastructure.cache.memory_cache import CacheEntry, MemoryCache

__all__ = [
    "CacheEntry",
    "EntityCache",
    "EntityCaches",
    "MemoryCache",
    "build_entity_caches",
    "default_cache_key",
    "memoize_with_ttl",
]

"""Named entity caches layered on the shared MemoryCache.

Each EntityCache owns a key pattern ``{prefix}:{id}``, a default TTL and a
group tag equal to its name, so a whole entity family can be dropped with
one call.

Usage:
    from src.core.container import get_entity_caches

    caches = get_entity_caches()
    caches.users.set(user.id, user)
    caches.users.invalidate_all()
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from src.domain.protocols.cache_protocol import CacheProtocol

USER_CACHE_TTL_SECONDS = 900
PRODUCT_CACHE_TTL_SECONDS = 1800
NEWS_CACHE_TTL_SECONDS = 3600


class EntityCache:
    """Cache facade for one entity family.

    Attributes:
        name: Group tag registered on every entry ("users").
        key_prefix: Key prefix ("user" -> "user:<id>").
        ttl_seconds: Default TTL for entries.
    """

    def __init__(
        self,
        cache: CacheProtocol,
        *,
        name: str,
        key_prefix: str,
        ttl_seconds: float,
    ) -> None:
        self._cache = cache
        self.name = name
        self.key_prefix = key_prefix
        self.ttl_seconds = ttl_seconds

    def key(self, entity_id: object) -> str:
        """Build the cache key for entity_id."""
        return f"{self.key_prefix}:{entity_id}"

    def get(self, entity_id: object) -> Any | None:
        return self._cache.get(self.key(entity_id))

    def set(
        self,
        entity_id: object,
        value: Any,
        ttl_seconds: float | None = None,
        tags: Iterable[str] | None = None,
    ) -> None:
        """Store value tagged with the group name plus any extra tags."""
        self._cache.set(
            self.key(entity_id),
            value,
            ttl_seconds=self.ttl_seconds if ttl_seconds is None else ttl_seconds,
            tags=[self.name, *(tags or ())],
        )

    def delete(self, entity_id: object) -> bool:
        return self._cache.delete(self.key(entity_id))

    def invalidate_all(self) -> int:
        """Drop every entry of this family."""
        return self._cache.invalidate_by_tag(self.name)


@dataclass(frozen=True, slots=True, kw_only=True)
class EntityCaches:
    """Preset entity caches sharing one underlying cache."""

    users: EntityCache
    products: EntityCache
    news: EntityCache


def build_entity_caches(cache: CacheProtocol) -> EntityCaches:
    """Create the user, product and news caches over cache."""
    return EntityCaches(
        users=EntityCache(
            cache, name="users", key_prefix="user", ttl_seconds=USER_CACHE_TTL_SECONDS
        ),
        products=EntityCache(
            cache,
            name="products",
            key_prefix="product",
            ttl_seconds=PRODUCT_CACHE_TTL_SECONDS,
        ),
        news=EntityCache(
            cache, name="news", key_prefix="news", ttl_seconds=NEWS_CACHE_TTL_SECONDS
        ),
    )

"""Memoization of async functions through the shared cache.

``memoize_with_ttl`` wraps an async callable so repeated calls with the
same arguments are served from the cache until the TTL lapses.

Usage:
    from src.core.container import get_cache
    from src.infrastructure.cache.memoize import memoize_with_ttl

    fetch_news = memoize_with_ttl(
        load_news_item,
        key_fn=lambda news_id: f"news:{news_id}",
        ttl_seconds=3600,
        tags=["news"],
        cache=get_cache(),
    )
    item = await fetch_news(7)
"""

import functools
import json
from collections.abc import Awaitable, Callable, Iterable
from typing import Any, ParamSpec, TypeVar

from src.domain.protocols.cache_protocol import CacheProtocol

P = ParamSpec("P")
R = TypeVar("R")


def default_cache_key(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> str:
    """Build ``<qualname>:<json args>`` for a call.

    Keyword arguments are appended as a sorted object so call order does
    not change the key. Non-JSON values fall back to str().
    """
    payload: list[Any] = list(args)
    if kwargs:
        payload.append(kwargs)
    return f"{fn.__qualname__}:{json.dumps(payload, default=str, sort_keys=True)}"


def memoize_with_ttl(
    fn: Callable[P, Awaitable[R]],
    *,
    cache: CacheProtocol,
    key_fn: Callable[P, str] | None = None,
    ttl_seconds: float = 300,
    tags: Iterable[str] | None = None,
) -> Callable[P, Awaitable[R]]:
    """Return an async wrapper caching fn's results.

    Args:
        fn: Async function to memoize.
        cache: Cache holding results.
        key_fn: Builds the cache key from the call arguments
            (default: default_cache_key).
        ttl_seconds: Lifetime of each cached result.
        tags: Tags registered on every cached result.

    Returns:
        Wrapper with fn's signature. None results are not cached.
    """
    tag_list = list(tags or ())

    @functools.wraps(fn)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        if key_fn is not None:
            key = key_fn(*args, **kwargs)
        else:
            key = default_cache_key(fn, *args, **kwargs)

        cached = cache.get(key)
        if cached is not None:
            return cached

        result = await fn(*args, **kwargs)
        if result is not None:
            cache.set(key, result, ttl_seconds=ttl_seconds, tags=tag_list)
        return result

    return wrapper

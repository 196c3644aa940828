"""Rate limiter protocol for domain layer.

A fixed-window counter per client identity. Adapters:
    - FixedWindowRateLimiter: in-process map (single instance)
    - RedisFixedWindowRateLimiter: shared Redis store (multi instance)

The request type is structural: anything with Starlette-like ``headers``
and ``client`` attributes can be keyed.
"""

from collections.abc import Mapping
from typing import Protocol

from src.domain.value_objects.rate_limit_rule import FixedWindowRule, RateLimitResult


class ClientAddress(Protocol):
    """Connection peer (Starlette ``request.client``)."""

    @property
    def host(self) -> str: ...


class RateLimitedRequest(Protocol):
    """Minimal view of an inbound request needed to derive its identity."""

    @property
    def headers(self) -> Mapping[str, str]: ...

    @property
    def client(self) -> ClientAddress | None: ...


class RateLimiterProtocol(Protocol):
    """Fixed-window rate limiter.

    Semantics:
        - First request for an identity (or first after ``now > reset_time``)
          opens a window with count=1 and reset_time = now + window.
        - Within a window, the N-th request succeeds and the N+1-th fails
          with remaining=0 and the unchanged reset_time.
    """

    rule: FixedWindowRule

    def key_for(self, request: RateLimitedRequest) -> str:
        """Return the identity string the request is counted under."""
        ...

    async def check(self, request: RateLimitedRequest) -> RateLimitResult:
        """Count the request against its identity and report the outcome."""
        ...

    async def hit(self, key: str) -> RateLimitResult:
        """Count one request against a precomputed identity."""
        ...

    async def reset(self, key: str) -> bool:
        """Forget an identity's window. Returns True if one existed."""
        ...

    def cleanup(self) -> int:
        """Purge expired windows. Returns the count removed."""
        ...

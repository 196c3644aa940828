"""Time source shared by the cache, rate limiter and token lifecycle.

Components take an optional ``clock`` so tests can drive time explicitly
(or freeze it with freezegun) without patching ``datetime``.
"""

from collections.abc import Callable
from datetime import UTC, datetime

type Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)

"""Fixed-window rate limit rule and result value objects.

Usage:
    from src.domain.value_objects import FixedWindowRule

    auth_rule = FixedWindowRule(name="auth", max_requests=5, window_seconds=900)
"""

import math
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta


@dataclass(frozen=True, slots=True, kw_only=True)
class FixedWindowRule:
    """Fixed-window rate limit configuration (value object).

    Fixed Window Algorithm:
        - The first request for a key opens a window of ``window_seconds``
        - Up to ``max_requests`` requests are allowed inside the window
        - The counter resets only once the window has fully elapsed

    Attributes:
        name: Rule name (used in logs and Redis keys).
        max_requests: Requests allowed per window (the N-th succeeds).
        window_seconds: Window length in seconds.
        key_prefix: Prefix of the identity key ("rate-limit" -> rate-limit:<ip>).

    Raises:
        ValueError: If max_requests or window_seconds is not positive.
    """

    name: str
    max_requests: int
    window_seconds: float
    key_prefix: str = "rate-limit"

    def __post_init__(self) -> None:
        """Validate rule configuration after initialization."""
        if self.max_requests <= 0:
            raise ValueError(f"max_requests must be positive, got {self.max_requests}")
        if self.window_seconds <= 0:
            raise ValueError(
                f"window_seconds must be positive, got {self.window_seconds}"
            )

    @property
    def window(self) -> timedelta:
        """Window length as a timedelta."""
        return timedelta(seconds=self.window_seconds)

    @property
    def window_ms(self) -> int:
        """Window length in milliseconds (used by the Redis script)."""
        return int(self.window_seconds * 1000)


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimitResult:
    """Outcome of a rate limit check.

    Attributes:
        success: Whether the request is allowed.
        remaining: Requests left in the current window (0 when denied).
        reset_time: When the current window ends (UTC).
        limit: Requests allowed per window.
    """

    success: bool
    remaining: int
    reset_time: datetime
    limit: int

    def retry_after_seconds(self, now: datetime | None = None) -> int:
        """Seconds until the window resets (at least 1).

        Args:
            now: Reference time (defaults to current UTC time).

        Returns:
            Whole seconds a rejected caller should wait.
        """
        now = now or datetime.now(UTC)
        return max(1, math.ceil((self.reset_time - now).total_seconds()))

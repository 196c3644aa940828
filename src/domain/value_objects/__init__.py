"""Domain value objects.

Usage:
    from src.domain.value_objects import FixedWindowRule, PasswordStrength
"""

from src.domain.value_objects.password_strength import PasswordStrength
from src.domain.value_objects.rate_limit_rule import FixedWindowRule, RateLimitResult

__all__ = [
    "FixedWindowRule",
    "PasswordStrength",
    "RateLimitResult",
]

"""Domain-specific errors.

Usage:
    from src.domain.errors import TokenError
"""

from src.domain.errors.token_error import INVALID_OR_EXPIRED_MESSAGE, TokenError

__all__ = [
    "INVALID_OR_EXPIRED_MESSAGE",
    "TokenError",
]

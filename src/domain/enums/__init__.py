"""Domain enums.

Usage:
    from src.domain.enums import TokenPurpose, UserRole, UserStatus
"""

from src.domain.enums.token_purpose import RESET_IDENTIFIER_PREFIX, TokenPurpose
from src.domain.enums.user_role import UserRole
from src.domain.enums.user_status import UserStatus

__all__ = [
    "RESET_IDENTIFIER_PREFIX",
    "TokenPurpose",
    "UserRole",
    "UserStatus",
]

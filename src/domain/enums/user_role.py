"""User roles on the community platform.

Hierarchy:
    owner > admin > staff > member

Usage:
    from src.domain.enums import UserRole

    if user.role == UserRole.ADMIN:
        ...
"""

from enum import Enum


class UserRole(str, Enum):
    """User roles (string enum for easy serialization)."""

    MEMBER = "member"
    STAFF = "staff"
    ADMIN = "admin"
    OWNER = "owner"

"""Domain entities.

Usage:
    from src.domain.entities import User
"""

from src.domain.entities.user import User

__all__ = ["User"]

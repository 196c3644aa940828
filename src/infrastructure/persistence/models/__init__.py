"""Database models for persistence layer.

These are infrastructure concerns and should not be imported by the domain
layer.

Models Organization:
    - user.py: User model
    - verification_token.py: Shared verification / password reset tokens

Note:
    Domain entities (dataclasses) live in src/domain/entities/
    Database models live here and are mapped via the repository layer.
"""

from src.infrastructure.persistence.models.user import User
from src.infrastructure.persistence.models.verification_token import (
    VerificationToken,
)

__all__ = [
    "User",
    "VerificationToken",
]

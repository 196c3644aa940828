"""Repository implementations (adapters for hexagonal architecture).

This package contains concrete implementations of repository protocols
defined in the domain layer.
"""

from src.infrastructure.persistence.repositories.user_repository import UserRepository
from src.infrastructure.persistence.repositories.verification_token_repository import (
    VerificationTokenRepository,
)

__all__ = [
    "UserRepository",
    "VerificationTokenRepository",
]

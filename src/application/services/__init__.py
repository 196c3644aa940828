"""Application services shared by several handlers."""

from src.application.services.token_lifecycle_service import (
    IssuedToken,
    TokenLifecycleService,
    TokenValidation,
)

__all__ = [
    "IssuedToken",
    "TokenLifecycleService",
    "TokenValidation",
]

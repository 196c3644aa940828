"""Queries - Read operations that never change state."""

from src.application.queries.auth_queries import ValidateResetToken

__all__ = ["ValidateResetToken"]

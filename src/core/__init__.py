"""Core shared kernel.

Foundational pieces used across all architectural layers:
- Result types for railway-oriented programming
- Base error classes and error codes
- Settings and the dependency container

The core module has NO dependencies on application or presentation layers.
"""

from src.core.enums import ErrorCode
from src.core.errors import (
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from src.core.result import Failure, Result, Success

__all__ = [
    "ConflictError",
    "DomainError",
    "ErrorCode",
    "Failure",
    "NotFoundError",
    "Result",
    "Success",
    "ValidationError",
]

"""Result types for railway-oriented programming.

Expected outcomes such as "token invalid or expired" are modelled as values
rather than exceptions, so call sites stay flat and explicit.

Usage:
    async def validate(token: str) -> Result[TokenValidation, TokenError]:
        record = await repo.find_active(token)
        if record is None:
            return Failure(error=TokenError(...))
        return Success(value=TokenValidation(...))

    match await service.validate(token, purpose):
        case Success(value=validation):
            ...
        case Failure(error=error):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


type Result[T, E] = Success[T] | Failure[E]

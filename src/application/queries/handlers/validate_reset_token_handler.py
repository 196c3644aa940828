"""Validate Reset Token handler (read only; the token stays usable)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from src.application.queries.auth_queries import ValidateResetToken
from src.application.services.token_lifecycle_service import TokenLifecycleService
from src.core.result import Failure, Result, Success
from src.domain.enums import TokenPurpose
from src.domain.errors import TokenError


@dataclass(frozen=True, kw_only=True)
class ResetTokenStatus:
    """A reset token that can still be used."""

    email: str
    expires_at: datetime
    message: str = "Token is valid"


class ValidateResetTokenHandler:
    """Handler for validate reset token query."""

    def __init__(self, token_service: TokenLifecycleService) -> None:
        self._token_service = token_service

    async def handle(self, query: ValidateResetToken) -> Result[ResetTokenStatus, TokenError]:
        match await self._token_service.validate(query.token, TokenPurpose.PASSWORD_RESET):
            case Success(value=validation):
                return Success(
                    value=ResetTokenStatus(
                        email=validation.subject, expires_at=validation.expires_at
                    )
                )
            case Failure(error=error):
                return Failure(error=error)

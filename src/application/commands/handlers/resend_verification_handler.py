"""Resend verification email handler.

Unknown and already verified addresses get the same answer as a real
resend, so the endpoint cannot be used to probe which emails have accounts.
A fresh token supersedes the one from the previous email.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.application.commands.auth_commands import ResendVerification
from src.application.services.token_lifecycle_service import TokenLifecycleService
from src.core.errors import DomainError
from src.core.result import Result, Success
from src.domain.enums import TokenPurpose
from src.domain.protocols import EmailProtocol, LoggerProtocol, UserRepository


@dataclass
class ResendVerificationResponse:
    message: str = (
        "If the account exists and is not yet verified, "
        "a verification email has been sent"
    )


class ResendVerificationHandler:
    """Handler for resend verification command."""

    def __init__(
        self,
        user_repo: UserRepository,
        token_service: TokenLifecycleService,
        email_service: EmailProtocol,
        logger: LoggerProtocol,
        verification_url_base: str,
    ) -> None:
        self._user_repo = user_repo
        self._token_service = token_service
        self._email_service = email_service
        self._logger = logger
        self._verification_url_base = verification_url_base

    async def handle(
        self, cmd: ResendVerification
    ) -> Result[ResendVerificationResponse, DomainError]:
        """Handle resend verification command.

        Returns:
            Always Success(ResendVerificationResponse).
        """
        user = await self._user_repo.find_by_email(cmd.email)
        if user is None or user.is_verified:
            self._logger.info(
                "Verification resend skipped",
                reason="user_not_found" if user is None else "already_verified",
            )
            return Success(value=ResendVerificationResponse())

        issued = await self._token_service.issue(
            user.email, TokenPurpose.EMAIL_VERIFICATION
        )
        verification_url = (
            f"{self._verification_url_base}/auth/verify-email?token={issued.token}"
        )
        sent = await self._email_service.send_verification_email(
            to_email=user.email,
            name=user.greeting_name,
            verification_url=verification_url,
        )
        if not sent:
            self._logger.warning(
                "Verification email not delivered", user_id=str(user.id)
            )
        return Success(value=ResendVerificationResponse())

"""Request Password Reset handler.

Flow:
1. Look up user by email
2. If the user is unknown or has no password: return the generic message
3. Issue password reset token (1 hour, supersedes earlier reset tokens)
4. Send password reset email
5. Post audit notification
6. Return Success(message)

Security:
- ALWAYS returns the same message to prevent user enumeration
- Request volume is bounded by the auth rate limiter in front of the route
"""

from __future__ import annotations

from dataclasses import dataclass

from src.application.commands.auth_commands import RequestPasswordReset
from src.application.services.token_lifecycle_service import TokenLifecycleService
from src.core.errors import DomainError
from src.core.result import Result, Success
from src.domain.enums import TokenPurpose
from src.domain.protocols import (
    EmailProtocol,
    LoggerProtocol,
    NotificationProtocol,
    UserRepository,
)


class PasswordResetSkipReason:
    """Why no reset email was sent (internal only, not exposed to API)."""

    USER_NOT_FOUND = "user_not_found"
    NO_PASSWORD = "no_password"


@dataclass
class PasswordResetRequestResponse:
    """Response data for password reset request.

    Note: Always the same message to prevent user enumeration.
    """

    message: str = (
        "If an account with that email exists, we've sent password reset instructions"
    )


class RequestPasswordResetHandler:
    """Handler for request password reset command."""

    def __init__(
        self,
        user_repo: UserRepository,
        token_service: TokenLifecycleService,
        email_service: EmailProtocol,
        notifier: NotificationProtocol,
        logger: LoggerProtocol,
        verification_url_base: str,
    ) -> None:
        self._user_repo = user_repo
        self._token_service = token_service
        self._email_service = email_service
        self._notifier = notifier
        self._logger = logger
        self._verification_url_base = verification_url_base

    async def handle(
        self, cmd: RequestPasswordReset
    ) -> Result[PasswordResetRequestResponse, DomainError]:
        """Handle password reset request command.

        Returns:
            Always Success(PasswordResetRequestResponse).
        """
        user = await self._user_repo.find_by_email(cmd.email)

        if user is None or not user.has_password:
            reason = (
                PasswordResetSkipReason.USER_NOT_FOUND
                if user is None
                else PasswordResetSkipReason.NO_PASSWORD
            )
            self._logger.info("Password reset not sent", reason=reason)
            return Success(value=PasswordResetRequestResponse())

        issued = await self._token_service.issue(user.email, TokenPurpose.PASSWORD_RESET)
        reset_url = f"{self._verification_url_base}/auth/reset-password?token={issued.token}"

        sent = await self._email_service.send_password_reset_email(
            to_email=user.email,
            name=user.greeting_name,
            reset_url=reset_url,
        )
        if not sent:
            self._logger.warning(
                "Password reset email not delivered", user_id=str(user.id)
            )

        await self._notifier.send_audit_log(
            action="password_reset_requested",
            user=user.email,
            details="Password reset link issued",
            metadata={"user_id": str(user.id), "email_sent": sent},
        )
        return Success(value=PasswordResetRequestResponse())

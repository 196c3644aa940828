"""Confirm Password Reset handler.

Flow:
1. Check new password strength
2. Validate reset token (unexpired, reset purpose)
3. Load the account the token was issued for
4. Consume the token (deletes every reset token of the account)
5. Store the new password hash; optionally activate a pending account
6. Post audit notification
7. Return Success(message)

The token consumption and the user update share the request transaction:
either both are committed or neither is.

Every token problem (unknown, expired, already used, account gone) is the
same generic TokenError.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.application.commands.auth_commands import ConfirmPasswordReset
from src.application.services.token_lifecycle_service import TokenLifecycleService
from src.core.errors import DomainError
from src.core.result import Failure, Result, Success
from src.domain.enums import TokenPurpose
from src.domain.errors import TokenError
from src.domain.protocols import (
    LoggerProtocol,
    NotificationProtocol,
    PasswordHashingProtocol,
    UserRepository,
)
from src.domain.validators import check_password_strength


@dataclass
class PasswordResetResponse:
    message: str = "Password reset successfully"


class ConfirmPasswordResetHandler:
    """Handler for confirm password reset command.

    Args:
        activate_account: Treat a completed reset as proof of email
            ownership (pending accounts become verified and active).
    """

    def __init__(
        self,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        token_service: TokenLifecycleService,
        notifier: NotificationProtocol,
        logger: LoggerProtocol,
        activate_account: bool = True,
    ) -> None:
        self._user_repo = user_repo
        self._password_service = password_service
        self._token_service = token_service
        self._notifier = notifier
        self._logger = logger
        self._activate_account = activate_account

    async def handle(
        self, cmd: ConfirmPasswordReset
    ) -> Result[PasswordResetResponse, DomainError]:
        """Handle confirm password reset command.

        Returns:
            Success(PasswordResetResponse) on success.
            Failure(ValidationError) for a weak password.
            Failure(TokenError) for any token problem.
        """
        if (error := check_password_strength(cmd.new_password)) is not None:
            return Failure(error=error)

        match await self._token_service.validate(cmd.token, TokenPurpose.PASSWORD_RESET):
            case Failure(error=token_error):
                return Failure(error=token_error)
            case Success(value=validation):
                pass

        user = await self._user_repo.find_by_email(
            validation.subject, for_update=True
        )
        if user is None:
            self._logger.warning(
                "Reset token for unknown account", identifier=validation.identifier
            )
            return Failure(error=TokenError.invalid_or_expired())

        consumed = await self._token_service.consume(cmd.token, validation.identifier)
        if isinstance(consumed, Failure):
            return Failure(error=consumed.error)

        was_pending = not user.is_verified
        user.change_password(
            self._password_service.hash_password(cmd.new_password),
            activate=self._activate_account,
        )
        await self._user_repo.update(user)

        await self._notifier.send_audit_log(
            action="password_reset_completed",
            user=user.email,
            details="Password changed with a reset link",
            metadata={
                "user_id": str(user.id),
                "account_activated": self._activate_account and was_pending,
            },
        )
        self._logger.info("Password reset completed", user_id=str(user.id))
        return Success(value=PasswordResetResponse())

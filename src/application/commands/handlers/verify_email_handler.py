"""Email verification handler.

Flow:
1. Validate verification token (unexpired, verification purpose)
2. Load the account the token was issued for
3. Reject accounts that are already verified (conflict)
4. Consume the token
5. Mark the email verified and the account active
6. Post audit notification
7. Return Success(message)
"""

from __future__ import annotations

from dataclasses import dataclass

from src.application.commands.auth_commands import VerifyEmail
from src.application.services.token_lifecycle_service import TokenLifecycleService
from src.core.enums import ErrorCode
from src.core.errors import ConflictError, DomainError
from src.core.result import Failure, Result, Success
from src.domain.enums import TokenPurpose
from src.domain.errors import TokenError
from src.domain.protocols import LoggerProtocol, NotificationProtocol, UserRepository


@dataclass
class EmailVerifiedResponse:
    message: str = "Email verified successfully"


class VerifyEmailHandler:
    """Handler for email verification command."""

    def __init__(
        self,
        user_repo: UserRepository,
        token_service: TokenLifecycleService,
        notifier: NotificationProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._token_service = token_service
        self._notifier = notifier
        self._logger = logger

    async def handle(self, cmd: VerifyEmail) -> Result[EmailVerifiedResponse, DomainError]:
        """Handle email verification command.

        Returns:
            Success(EmailVerifiedResponse) on success.
            Failure(TokenError) for any token problem.
            Failure(ConflictError) if the email is already verified.
        """
        match await self._token_service.validate(
            cmd.token, TokenPurpose.EMAIL_VERIFICATION
        ):
            case Failure(error=token_error):
                return Failure(error=token_error)
            case Success(value=validation):
                pass

        user = await self._user_repo.find_by_email(
            validation.subject, for_update=True
        )
        if user is None:
            return Failure(error=TokenError.invalid_or_expired())

        if user.is_verified:
            return Failure(
                error=ConflictError(
                    code=ErrorCode.EMAIL_ALREADY_VERIFIED,
                    message="Email is already verified",
                    resource_type="User",
                    conflicting_field="email",
                )
            )

        consumed = await self._token_service.consume(cmd.token, validation.identifier)
        if isinstance(consumed, Failure):
            return Failure(error=consumed.error)

        user.mark_email_verified()
        await self._user_repo.update(user)

        await self._notifier.send_audit_log(
            action="email_verified",
            user=user.email,
            details="Email address verified",
            metadata={"user_id": str(user.id)},
        )
        self._logger.info("Email verified", user_id=str(user.id))
        return Success(value=EmailVerifiedResponse())

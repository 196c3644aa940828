"""Register User handler.

Flow:
1. Validate email, username format and password strength
2. Reject duplicate email or username (conflict)
3. Hash password, create pending member account
4. Issue email verification token (24 hours)
5. Send verification email (delivery failure is logged, not fatal)
6. Announce the registration on the community webhook (best effort)
7. Return Success(RegisteredUser)

Architecture:
- Application layer ONLY imports from domain layer (entities, protocols)
- NO infrastructure imports (repositories are injected via protocols)
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID, uuid4

from src.application.commands.auth_commands import RegisterUser
from src.application.services.token_lifecycle_service import TokenLifecycleService
from src.core.enums import ErrorCode
from src.core.errors import ConflictError, DomainError
from src.core.result import Failure, Result, Success
from src.domain.entities.user import User
from src.domain.enums import TokenPurpose, UserStatus
from src.domain.protocols import (
    EmailProtocol,
    LoggerProtocol,
    NotificationProtocol,
    PasswordHashingProtocol,
    UserRepository,
)
from src.domain.validators import (
    check_email,
    check_password_strength,
    check_username,
)


@dataclass(frozen=True, kw_only=True)
class RegisteredUser:
    """Response data for a successful registration."""

    id: UUID
    email: str
    username: str
    status: UserStatus
    message: str = "User created successfully"


class RegisterUserHandler:
    """Handler for user registration command."""

    def __init__(
        self,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        token_service: TokenLifecycleService,
        email_service: EmailProtocol,
        notifier: NotificationProtocol,
        logger: LoggerProtocol,
        verification_url_base: str,
    ) -> None:
        """Initialize registration handler with dependencies.

        Args:
            user_repo: User repository for persistence.
            password_service: Password hashing service.
            token_service: Token lifecycle service.
            email_service: Email sending service.
            notifier: Community webhook notifier.
            logger: Structured logger.
            verification_url_base: Web app base URL for verification links.
        """
        self._user_repo = user_repo
        self._password_service = password_service
        self._token_service = token_service
        self._email_service = email_service
        self._notifier = notifier
        self._logger = logger
        self._verification_url_base = verification_url_base

    async def handle(self, cmd: RegisterUser) -> Result[RegisteredUser, DomainError]:
        """Handle registration command.

        Returns:
            Success(RegisteredUser) on success.
            Failure(ValidationError) for a reserved email, bad username or weak
            password.
            Failure(ConflictError) if the email or username is taken.
        """
        if (error := check_email(cmd.email)) is not None:
            return Failure(error=error)
        if (error := check_username(cmd.username)) is not None:
            return Failure(error=error)
        if (error := check_password_strength(cmd.password)) is not None:
            return Failure(error=error)

        email = cmd.email.lower()
        username = cmd.username.lower()

        if await self._user_repo.exists_by_email(email):
            return Failure(
                error=ConflictError(
                    code=ErrorCode.EMAIL_ALREADY_EXISTS,
                    message="User already exists with this email",
                    resource_type="User",
                    conflicting_field="email",
                )
            )
        if await self._user_repo.exists_by_username(username):
            return Failure(
                error=ConflictError(
                    code=ErrorCode.USERNAME_ALREADY_EXISTS,
                    message="Username is already taken",
                    resource_type="User",
                    conflicting_field="username",
                )
            )

        user = User(
            id=uuid4(),
            email=email,
            username=username,
            display_name=cmd.display_name or cmd.username,
            password_hash=self._password_service.hash_password(cmd.password),
        )
        await self._user_repo.save(user)

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

        await self._notifier.send_user_registration(
            username=user.username, email=user.email, provider="credentials"
        )

        self._logger.info("User registered", user_id=str(user.id))
        return Success(
            value=RegisteredUser(
                id=user.id,
                email=user.email,
                username=user.username,
                status=user.status,
            )
        )

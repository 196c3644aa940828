"""Authentication handler dependency factories.

Request-scoped handler instances for the account flows:
- User registration
- Email verification (verify, resend)
- Password reset (request, validate token, confirm)

Each factory builds its repositories on the request session, so the token
consumption and the user update of one request commit together.
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.core.container.infrastructure import (
    get_db_session,
    get_email_service,
    get_entity_caches,
    get_logger,
    get_notifier,
    get_password_service,
    get_token_generator,
)

if TYPE_CHECKING:
    from src.application.commands.handlers.confirm_password_reset_handler import (
        ConfirmPasswordResetHandler,
    )
    from src.application.commands.handlers.register_user_handler import (
        RegisterUserHandler,
    )
    from src.application.commands.handlers.request_password_reset_handler import (
        RequestPasswordResetHandler,
    )
    from src.application.commands.handlers.resend_verification_handler import (
        ResendVerificationHandler,
    )
    from src.application.commands.handlers.verify_email_handler import (
        VerifyEmailHandler,
    )
    from src.application.queries.handlers.validate_reset_token_handler import (
        ValidateResetTokenHandler,
    )
    from src.application.services.token_lifecycle_service import (
        TokenLifecycleService,
    )
    from src.infrastructure.persistence.repositories import UserRepository


def _user_repository(session: AsyncSession) -> "UserRepository":
    from src.infrastructure.persistence.repositories import UserRepository

    return UserRepository(session=session, user_cache=get_entity_caches().users)


def _token_service(session: AsyncSession) -> "TokenLifecycleService":
    from src.application.services.token_lifecycle_service import (
        TokenLifecycleService,
    )
    from src.infrastructure.persistence.repositories import (
        VerificationTokenRepository,
    )

    return TokenLifecycleService(
        VerificationTokenRepository(session=session),
        get_token_generator(),
        logger=get_logger(),
        reset_ttl_seconds=settings.password_reset_token_ttl_seconds,
        verification_ttl_seconds=settings.email_verification_token_ttl_seconds,
    )


# ============================================================================
# Authentication Handler Factories
# ============================================================================


async def get_register_user_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "RegisterUserHandler":
    """Get RegisterUser command handler (request-scoped).

    Creates new handler instance per request with all required dependencies:
    - UserRepository (request-scoped, uses session and the users cache)
    - TokenLifecycleService (request-scoped, uses session)
    - BcryptPasswordService, email service, notifier (app-scoped singletons)

    Returns:
        RegisterUserHandler instance.

    Usage:
        # Presentation Layer (FastAPI endpoint)
        @router.post("/users")
        async def create_user(
            handler: RegisterUserHandler = Depends(get_register_user_handler)
        ):
            result = await handler.handle(command)
    """
    from src.application.commands.handlers.register_user_handler import (
        RegisterUserHandler,
    )

    return RegisterUserHandler(
        user_repo=_user_repository(session),
        password_service=get_password_service(),
        token_service=_token_service(session),
        email_service=get_email_service(),
        notifier=get_notifier(),
        logger=get_logger(),
        verification_url_base=settings.verification_url_base,
    )


async def get_verify_email_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "VerifyEmailHandler":
    """Get VerifyEmail command handler (request-scoped)."""
    from src.application.commands.handlers.verify_email_handler import (
        VerifyEmailHandler,
    )

    return VerifyEmailHandler(
        user_repo=_user_repository(session),
        token_service=_token_service(session),
        notifier=get_notifier(),
        logger=get_logger(),
    )


async def get_resend_verification_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ResendVerificationHandler":
    """Get ResendVerification command handler (request-scoped)."""
    from src.application.commands.handlers.resend_verification_handler import (
        ResendVerificationHandler,
    )

    return ResendVerificationHandler(
        user_repo=_user_repository(session),
        token_service=_token_service(session),
        email_service=get_email_service(),
        logger=get_logger(),
        verification_url_base=settings.verification_url_base,
    )


async def get_request_password_reset_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "RequestPasswordResetHandler":
    """Get RequestPasswordReset command handler (request-scoped).

    Returns:
        RequestPasswordResetHandler instance. The handler answers the same
        way for known and unknown emails.
    """
    from src.application.commands.handlers.request_password_reset_handler import (
        RequestPasswordResetHandler,
    )

    return RequestPasswordResetHandler(
        user_repo=_user_repository(session),
        token_service=_token_service(session),
        email_service=get_email_service(),
        notifier=get_notifier(),
        logger=get_logger(),
        verification_url_base=settings.verification_url_base,
    )


async def get_validate_reset_token_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ValidateResetTokenHandler":
    """Get ValidateResetToken query handler (request-scoped)."""
    from src.application.queries.handlers.validate_reset_token_handler import (
        ValidateResetTokenHandler,
    )

    return ValidateResetTokenHandler(token_service=_token_service(session))


async def get_confirm_password_reset_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ConfirmPasswordResetHandler":
    """Get ConfirmPasswordReset command handler (request-scoped).

    PASSWORD_RESET_ACTIVATES_ACCOUNT decides whether a completed reset also
    verifies a pending account.
    """
    from src.application.commands.handlers.confirm_password_reset_handler import (
        ConfirmPasswordResetHandler,
    )

    return ConfirmPasswordResetHandler(
        user_repo=_user_repository(session),
        password_service=get_password_service(),
        token_service=_token_service(session),
        notifier=get_notifier(),
        logger=get_logger(),
        activate_account=settings.password_reset_activates_account,
    )

"""Unit tests for VerifyEmailHandler and ResendVerificationHandler."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, Mock
from uuid import uuid4

import pytest

from src.application.commands.auth_commands import ResendVerification, VerifyEmail
from src.application.commands.handlers.resend_verification_handler import (
    ResendVerificationHandler,
)
from src.application.commands.handlers.verify_email_handler import VerifyEmailHandler
from src.application.services.token_lifecycle_service import (
    IssuedToken,
    TokenValidation,
)
from src.core.enums import ErrorCode
from src.core.errors import ConflictError
from src.core.result import Failure, Success
from src.domain.entities.user import User
from src.domain.enums import TokenPurpose, UserStatus
from src.domain.errors import TokenError

TOKEN = "c" * 64
EXPIRES = datetime(2026, 1, 2, 12, 0, tzinfo=UTC)


def make_user(**overrides) -> User:
    values = {
        "id": uuid4(),
        "email": "ada@example.com",
        "username": "ada_l",
        "password_hash": "$2b$12$hash",
    }
    values.update(overrides)
    return User(**values)


@pytest.fixture
def user_repo():
    repo = Mock()
    repo.find_by_email = AsyncMock(return_value=make_user())
    repo.update = AsyncMock()
    return repo


@pytest.fixture
def token_service():
    service = Mock()
    service.validate = AsyncMock(
        return_value=Success(
            value=TokenValidation(
                identifier="ada@example.com",
                subject="ada@example.com",
                purpose=TokenPurpose.EMAIL_VERIFICATION,
                expires_at=EXPIRES,
            )
        )
    )
    service.consume = AsyncMock(return_value=Success(value=None))
    service.issue = AsyncMock(
        return_value=IssuedToken(
            token=TOKEN, identifier="ada@example.com", expires_at=EXPIRES
        )
    )
    return service


@pytest.fixture
def notifier():
    service = Mock()
    service.send_audit_log = AsyncMock(return_value=True)
    return service


@pytest.mark.unit
class TestVerifyEmailHandler:
    """Email verification."""

    @pytest.fixture
    def handler(self, user_repo, token_service, notifier):
        return VerifyEmailHandler(
            user_repo=user_repo,
            token_service=token_service,
            notifier=notifier,
            logger=Mock(),
        )

    @pytest.mark.asyncio
    async def test_verifies_and_activates_account(
        self, handler, user_repo, token_service, notifier
    ):
        result = await handler.handle(VerifyEmail(token=TOKEN))

        assert isinstance(result, Success)
        assert result.value.message == "Email verified successfully"
        token_service.validate.assert_awaited_once_with(
            TOKEN, TokenPurpose.EMAIL_VERIFICATION
        )
        user_repo.find_by_email.assert_awaited_once_with(
            "ada@example.com", for_update=True
        )
        token_service.consume.assert_awaited_once_with(TOKEN, "ada@example.com")
        updated = user_repo.update.await_args.args[0]
        assert updated.is_verified is True
        assert updated.status == UserStatus.ACTIVE
        assert notifier.send_audit_log.await_args.kwargs["action"] == "email_verified"

    @pytest.mark.asyncio
    async def test_invalid_token(self, handler, token_service, user_repo):
        token_service.validate.return_value = Failure(
            error=TokenError.invalid_or_expired()
        )

        result = await handler.handle(VerifyEmail(token="nope"))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_INVALID
        user_repo.find_by_email.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_already_verified_is_conflict(self, handler, user_repo, token_service):
        user_repo.find_by_email.return_value = make_user(
            email_verified_at=datetime(2025, 12, 1, tzinfo=UTC),
            status=UserStatus.ACTIVE,
        )

        result = await handler.handle(VerifyEmail(token=TOKEN))

        assert isinstance(result, Failure)
        assert isinstance(result.error, ConflictError)
        assert result.error.code == ErrorCode.EMAIL_ALREADY_VERIFIED
        token_service.consume.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_account_is_token_error(self, handler, user_repo):
        user_repo.find_by_email.return_value = None

        result = await handler.handle(VerifyEmail(token=TOKEN))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_INVALID

    @pytest.mark.asyncio
    async def test_consumption_failure_leaves_user_untouched(
        self, handler, token_service, user_repo
    ):
        token_service.consume.return_value = Failure(
            error=TokenError.invalid_or_expired()
        )

        result = await handler.handle(VerifyEmail(token=TOKEN))

        assert isinstance(result, Failure)
        user_repo.update.assert_not_awaited()


@pytest.mark.unit
class TestResendVerificationHandler:
    """Resending verification links."""

    @pytest.fixture
    def email_service(self):
        service = Mock()
        service.send_verification_email = AsyncMock(return_value=True)
        return service

    @pytest.fixture
    def handler(self, user_repo, token_service, email_service):
        return ResendVerificationHandler(
            user_repo=user_repo,
            token_service=token_service,
            email_service=email_service,
            logger=Mock(),
            verification_url_base="https://hypea.test",
        )

    @pytest.mark.asyncio
    async def test_pending_user_gets_fresh_link(
        self, handler, token_service, email_service
    ):
        result = await handler.handle(ResendVerification(email="ada@example.com"))

        assert isinstance(result, Success)
        token_service.issue.assert_awaited_once_with(
            "ada@example.com", TokenPurpose.EMAIL_VERIFICATION
        )
        kwargs = email_service.send_verification_email.await_args.kwargs
        assert kwargs["verification_url"] == (
            f"https://hypea.test/auth/verify-email?token={TOKEN}"
        )
        assert kwargs["name"] == "ada_l"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("case", ["unknown", "verified"])
    async def test_skipped_accounts_get_same_answer(
        self, handler, user_repo, token_service, email_service, case
    ):
        user_repo.find_by_email.return_value = (
            None
            if case == "unknown"
            else make_user(email_verified_at=datetime(2025, 12, 1, tzinfo=UTC))
        )

        result = await handler.handle(ResendVerification(email="ada@example.com"))

        assert isinstance(result, Success)
        assert result.value.message == (
            "If the account exists and is not yet verified, "
            "a verification email has been sent"
        )
        token_service.issue.assert_not_awaited()
        email_service.send_verification_email.assert_not_awaited()

"""Unit tests for the password reset flow handlers.

Tests cover:
- RequestPasswordResetHandler: generic success for every address, token
  issue, email link and audit notification for real accounts
- ValidateResetTokenHandler: valid and invalid tokens
- ConfirmPasswordResetHandler: weak password, token failures, account
  activation switch, single-use consumption

Architecture:
- Unit tests with mocked repository, token service, email and notifier
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, Mock
from uuid import uuid4

import pytest

from src.application.commands.auth_commands import (
    ConfirmPasswordReset,
    RequestPasswordReset,
)
from src.application.commands.handlers.confirm_password_reset_handler import (
    ConfirmPasswordResetHandler,
)
from src.application.commands.handlers.request_password_reset_handler import (
    RequestPasswordResetHandler,
)
from src.application.queries.auth_queries import ValidateResetToken
from src.application.queries.handlers.validate_reset_token_handler import (
    ValidateResetTokenHandler,
)
from src.application.services.token_lifecycle_service import (
    IssuedToken,
    TokenValidation,
)
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.entities.user import User
from src.domain.enums import TokenPurpose, UserStatus
from src.domain.errors import TokenError

TOKEN = "b" * 64
EXPIRES = datetime(2026, 1, 1, 13, 0, tzinfo=UTC)
GENERIC_REQUEST_MESSAGE = (
    "If an account with that email exists, we've sent password reset instructions"
)


def make_user(**overrides) -> User:
    values = {
        "id": uuid4(),
        "email": "ada@example.com",
        "username": "ada_l",
        "display_name": "Ada",
        "password_hash": "$2b$12$old",
    }
    values.update(overrides)
    return User(**values)


def valid_reset() -> Success:
    return Success(
        value=TokenValidation(
            identifier="reset_ada@example.com",
            subject="ada@example.com",
            purpose=TokenPurpose.PASSWORD_RESET,
            expires_at=EXPIRES,
        )
    )


@pytest.fixture
def user_repo():
    repo = Mock()
    repo.find_by_email = AsyncMock(return_value=make_user())
    repo.update = AsyncMock()
    return repo


@pytest.fixture
def token_service():
    service = Mock()
    service.issue = AsyncMock(
        return_value=IssuedToken(
            token=TOKEN, identifier="reset_ada@example.com", expires_at=EXPIRES
        )
    )
    service.validate = AsyncMock(return_value=valid_reset())
    service.consume = AsyncMock(return_value=Success(value=None))
    return service


@pytest.fixture
def email_service():
    service = Mock()
    service.send_password_reset_email = AsyncMock(return_value=True)
    return service


@pytest.fixture
def notifier():
    service = Mock()
    service.send_audit_log = AsyncMock(return_value=True)
    return service


@pytest.mark.unit
class TestRequestPasswordResetHandler:
    """Reset requests never reveal whether an account exists."""

    @pytest.fixture
    def handler(self, user_repo, token_service, email_service, notifier):
        return RequestPasswordResetHandler(
            user_repo=user_repo,
            token_service=token_service,
            email_service=email_service,
            notifier=notifier,
            logger=Mock(),
            verification_url_base="https://hypea.test",
        )

    @pytest.mark.asyncio
    async def test_existing_user_gets_reset_link(
        self, handler, token_service, email_service, notifier
    ):
        result = await handler.handle(RequestPasswordReset(email="ada@example.com"))

        assert isinstance(result, Success)
        assert result.value.message == GENERIC_REQUEST_MESSAGE
        token_service.issue.assert_awaited_once_with(
            "ada@example.com", TokenPurpose.PASSWORD_RESET
        )
        email_service.send_password_reset_email.assert_awaited_once_with(
            to_email="ada@example.com",
            name="Ada",
            reset_url=f"https://hypea.test/auth/reset-password?token={TOKEN}",
        )
        audit = notifier.send_audit_log.await_args.kwargs
        assert audit["action"] == "password_reset_requested"
        assert audit["metadata"]["email_sent"] is True

    @pytest.mark.asyncio
    async def test_unknown_email_same_answer_nothing_sent(
        self, handler, user_repo, token_service, email_service
    ):
        user_repo.find_by_email.return_value = None

        result = await handler.handle(RequestPasswordReset(email="nobody@example.com"))

        assert isinstance(result, Success)
        assert result.value.message == GENERIC_REQUEST_MESSAGE
        token_service.issue.assert_not_awaited()
        email_service.send_password_reset_email.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_account_without_password_skipped(
        self, handler, user_repo, token_service
    ):
        user_repo.find_by_email.return_value = make_user(password_hash=None)

        result = await handler.handle(RequestPasswordReset(email="ada@example.com"))

        assert isinstance(result, Success)
        token_service.issue.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delivery_failure_still_generic_success(
        self, handler, email_service, notifier
    ):
        email_service.send_password_reset_email.return_value = False

        result = await handler.handle(RequestPasswordReset(email="ada@example.com"))

        assert isinstance(result, Success)
        assert notifier.send_audit_log.await_args.kwargs["metadata"]["email_sent"] is False


@pytest.mark.unit
class TestValidateResetTokenHandler:
    """Read-only token check."""

    @pytest.mark.asyncio
    async def test_valid_token(self, token_service):
        handler = ValidateResetTokenHandler(token_service)

        result = await handler.handle(ValidateResetToken(token=TOKEN))

        assert isinstance(result, Success)
        assert result.value.email == "ada@example.com"
        assert result.value.expires_at == EXPIRES
        token_service.consume.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_token(self, token_service):
        token_service.validate.return_value = Failure(
            error=TokenError.invalid_or_expired()
        )
        handler = ValidateResetTokenHandler(token_service)

        result = await handler.handle(ValidateResetToken(token="nope"))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_INVALID


@pytest.mark.unit
class TestConfirmPasswordResetHandler:
    """Executing a reset."""

    @pytest.fixture
    def password_service(self):
        service = Mock()
        service.hash_password.return_value = "$2b$12$new"
        return service

    def make_handler(self, user_repo, password_service, token_service, notifier, **kw):
        return ConfirmPasswordResetHandler(
            user_repo=user_repo,
            password_service=password_service,
            token_service=token_service,
            notifier=notifier,
            logger=Mock(),
            **kw,
        )

    @pytest.mark.asyncio
    async def test_resets_password_and_consumes_token(
        self, user_repo, password_service, token_service, notifier
    ):
        handler = self.make_handler(user_repo, password_service, token_service, notifier)

        result = await handler.handle(
            ConfirmPasswordReset(token=TOKEN, new_password="Sn3aky!23")
        )

        assert isinstance(result, Success)
        assert result.value.message == "Password reset successfully"
        user_repo.find_by_email.assert_awaited_once_with(
            "ada@example.com", for_update=True
        )
        token_service.consume.assert_awaited_once_with(TOKEN, "reset_ada@example.com")
        updated = user_repo.update.await_args.args[0]
        assert updated.password_hash == "$2b$12$new"
        assert notifier.send_audit_log.await_args.kwargs["action"] == (
            "password_reset_completed"
        )

    @pytest.mark.asyncio
    async def test_pending_account_activated_by_default(
        self, user_repo, password_service, token_service, notifier
    ):
        handler = self.make_handler(user_repo, password_service, token_service, notifier)

        await handler.handle(ConfirmPasswordReset(token=TOKEN, new_password="Sn3aky!23"))

        updated = user_repo.update.await_args.args[0]
        assert updated.status == UserStatus.ACTIVE
        assert updated.is_verified is True
        metadata = notifier.send_audit_log.await_args.kwargs["metadata"]
        assert metadata["account_activated"] is True

    @pytest.mark.asyncio
    async def test_activation_can_be_disabled(
        self, user_repo, password_service, token_service, notifier
    ):
        handler = self.make_handler(
            user_repo, password_service, token_service, notifier, activate_account=False
        )

        await handler.handle(ConfirmPasswordReset(token=TOKEN, new_password="Sn3aky!23"))

        updated = user_repo.update.await_args.args[0]
        assert updated.status == UserStatus.PENDING_VERIFICATION
        assert updated.is_verified is False

    @pytest.mark.asyncio
    async def test_weak_password_checked_before_token(
        self, user_repo, password_service, token_service, notifier
    ):
        handler = self.make_handler(user_repo, password_service, token_service, notifier)

        result = await handler.handle(
            ConfirmPasswordReset(token=TOKEN, new_password="weakpass")
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.PASSWORD_TOO_WEAK
        token_service.validate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_token(self, user_repo, password_service, token_service, notifier):
        token_service.validate.return_value = Failure(
            error=TokenError.invalid_or_expired()
        )
        handler = self.make_handler(user_repo, password_service, token_service, notifier)

        result = await handler.handle(
            ConfirmPasswordReset(token="f" * 64, new_password="Sn3aky!23")
        )

        assert isinstance(result, Failure)
        assert result.error.message == "Invalid or expired token"
        user_repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_account_reported_as_token_error(
        self, user_repo, password_service, token_service, notifier
    ):
        user_repo.find_by_email.return_value = None
        handler = self.make_handler(user_repo, password_service, token_service, notifier)

        result = await handler.handle(
            ConfirmPasswordReset(token=TOKEN, new_password="Sn3aky!23")
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_INVALID
        token_service.consume.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_lost_consumption_race_changes_nothing(
        self, user_repo, password_service, token_service, notifier
    ):
        token_service.consume.return_value = Failure(
            error=TokenError.invalid_or_expired()
        )
        handler = self.make_handler(user_repo, password_service, token_service, notifier)

        result = await handler.handle(
            ConfirmPasswordReset(token=TOKEN, new_password="Sn3aky!23")
        )

        assert isinstance(result, Failure)
        user_repo.update.assert_not_awaited()
        notifier.send_audit_log.assert_not_awaited()

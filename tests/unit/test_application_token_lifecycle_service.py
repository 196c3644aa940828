"""Unit tests for TokenLifecycleService.

Tests cover:
- Issue: identifier convention per purpose, TTL defaults and overrides
- Supersession: a new token invalidates the previous one
- Validation: purpose mismatch and expiry report the same generic error
- Single use: a consumed token can never be consumed or validated again
- Purge of expired rows

Architecture:
- In-memory token repository honouring the repository protocol
- ManualClock drives expiry
"""

from datetime import datetime, timedelta
from itertools import count
from unittest.mock import Mock

import pytest

from src.application.services.token_lifecycle_service import TokenLifecycleService
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.enums import TokenPurpose
from src.domain.errors import INVALID_OR_EXPIRED_MESSAGE
from src.domain.protocols import VerificationTokenData


class InMemoryTokenRepository:
    """Dict-backed VerificationTokenRepository."""

    def __init__(self) -> None:
        self.rows: dict[str, VerificationTokenData] = {}

    async def save(self, identifier: str, token: str, expires: datetime) -> None:
        self.rows[token] = VerificationTokenData(
            identifier=identifier, token=token, expires=expires
        )

    async def find_unexpired(self, token, now):
        row = self.rows.get(token)
        return row if row is not None and row.expires > now else None

    async def delete_by_identifier(self, identifier: str) -> int:
        doomed = [t for t, r in self.rows.items() if r.identifier == identifier]
        for token in doomed:
            del self.rows[token]
        return len(doomed)

    async def delete_unexpired(self, identifier, token, now) -> int:
        row = self.rows.get(token)
        if row is None or row.identifier != identifier or row.expires <= now:
            return 0
        del self.rows[token]
        return 1

    async def delete_expired(self, now) -> int:
        doomed = [t for t, r in self.rows.items() if r.expires <= now]
        for token in doomed:
            del self.rows[token]
        return len(doomed)


class SequentialTokenGenerator:
    def __init__(self) -> None:
        self._seq = count(1)

    def generate_token(self) -> str:
        return f"{next(self._seq):064x}"


@pytest.fixture
def repo():
    return InMemoryTokenRepository()


@pytest.fixture
def service(repo, clock):
    return TokenLifecycleService(
        repo,
        SequentialTokenGenerator(),
        logger=Mock(),
        reset_ttl_seconds=3600,
        verification_ttl_seconds=86400,
        clock=clock,
    )


def assert_generic_failure(result):
    assert isinstance(result, Failure)
    assert result.error.code == ErrorCode.TOKEN_INVALID
    assert result.error.message == INVALID_OR_EXPIRED_MESSAGE


@pytest.mark.unit
class TestIssue:
    """Token issuance."""

    @pytest.mark.asyncio
    async def test_reset_token_stored_under_prefixed_identifier(self, service, repo, clock):
        issued = await service.issue("Ada@Example.com", TokenPurpose.PASSWORD_RESET)

        assert issued.identifier == "reset_ada@example.com"
        assert issued.expires_at == clock.now + timedelta(hours=1)
        assert repo.rows[issued.token].identifier == "reset_ada@example.com"
        assert len(issued.token) == 64

    @pytest.mark.asyncio
    async def test_verification_token_stored_under_email(self, service, clock):
        issued = await service.issue("ada@example.com", TokenPurpose.EMAIL_VERIFICATION)

        assert issued.identifier == "ada@example.com"
        assert issued.expires_at == clock.now + timedelta(hours=24)

    @pytest.mark.asyncio
    async def test_ttl_override(self, service, clock):
        issued = await service.issue(
            "ada@example.com", TokenPurpose.PASSWORD_RESET, ttl_seconds=60
        )

        assert issued.expires_at == clock.now + timedelta(seconds=60)

    @pytest.mark.asyncio
    async def test_new_token_supersedes_previous(self, service, repo):
        first = await service.issue("ada@example.com", TokenPurpose.PASSWORD_RESET)
        second = await service.issue("ada@example.com", TokenPurpose.PASSWORD_RESET)

        assert_generic_failure(
            await service.validate(first.token, TokenPurpose.PASSWORD_RESET)
        )
        assert isinstance(
            await service.validate(second.token, TokenPurpose.PASSWORD_RESET), Success
        )
        assert list(repo.rows) == [second.token]

    @pytest.mark.asyncio
    async def test_purposes_do_not_supersede_each_other(self, service):
        verify = await service.issue("ada@example.com", TokenPurpose.EMAIL_VERIFICATION)
        await service.issue("ada@example.com", TokenPurpose.PASSWORD_RESET)

        result = await service.validate(verify.token, TokenPurpose.EMAIL_VERIFICATION)

        assert isinstance(result, Success)


@pytest.mark.unit
class TestValidate:
    """Validation without consumption."""

    @pytest.mark.asyncio
    async def test_valid_token_reports_subject(self, service):
        issued = await service.issue("ada@example.com", TokenPurpose.PASSWORD_RESET)

        result = await service.validate(issued.token, TokenPurpose.PASSWORD_RESET)

        assert isinstance(result, Success)
        assert result.value.subject == "ada@example.com"
        assert result.value.identifier == "reset_ada@example.com"
        assert result.value.expires_at == issued.expires_at

    @pytest.mark.asyncio
    async def test_validation_does_not_consume(self, service):
        issued = await service.issue("ada@example.com", TokenPurpose.PASSWORD_RESET)

        await service.validate(issued.token, TokenPurpose.PASSWORD_RESET)
        result = await service.validate(issued.token, TokenPurpose.PASSWORD_RESET)

        assert isinstance(result, Success)

    @pytest.mark.asyncio
    async def test_unknown_token(self, service):
        assert_generic_failure(
            await service.validate("f" * 64, TokenPurpose.PASSWORD_RESET)
        )

    @pytest.mark.asyncio
    async def test_expired_token(self, service, clock):
        issued = await service.issue("ada@example.com", TokenPurpose.PASSWORD_RESET)

        clock.advance(hours=1)

        assert_generic_failure(
            await service.validate(issued.token, TokenPurpose.PASSWORD_RESET)
        )

    @pytest.mark.asyncio
    async def test_verification_token_rejected_for_reset(self, service):
        issued = await service.issue("ada@example.com", TokenPurpose.EMAIL_VERIFICATION)

        assert_generic_failure(
            await service.validate(issued.token, TokenPurpose.PASSWORD_RESET)
        )

    @pytest.mark.asyncio
    async def test_reset_token_rejected_for_verification(self, service):
        issued = await service.issue("ada@example.com", TokenPurpose.PASSWORD_RESET)

        assert_generic_failure(
            await service.validate(issued.token, TokenPurpose.EMAIL_VERIFICATION)
        )


@pytest.mark.unit
class TestConsume:
    """Single use."""

    @pytest.mark.asyncio
    async def test_consume_once(self, service, repo):
        issued = await service.issue("ada@example.com", TokenPurpose.PASSWORD_RESET)

        first = await service.consume(issued.token, issued.identifier)
        second = await service.consume(issued.token, issued.identifier)

        assert isinstance(first, Success)
        assert_generic_failure(second)
        assert repo.rows == {}

    @pytest.mark.asyncio
    async def test_consumed_token_no_longer_validates(self, service):
        issued = await service.issue("ada@example.com", TokenPurpose.EMAIL_VERIFICATION)
        await service.consume(issued.token, issued.identifier)

        assert_generic_failure(
            await service.validate(issued.token, TokenPurpose.EMAIL_VERIFICATION)
        )

    @pytest.mark.asyncio
    async def test_expired_token_cannot_be_consumed(self, service, clock):
        issued = await service.issue("ada@example.com", TokenPurpose.PASSWORD_RESET)
        clock.advance(hours=2)

        assert_generic_failure(await service.consume(issued.token, issued.identifier))

    @pytest.mark.asyncio
    async def test_wrong_identifier_cannot_consume(self, service):
        issued = await service.issue("ada@example.com", TokenPurpose.PASSWORD_RESET)

        assert_generic_failure(
            await service.consume(issued.token, "reset_grace@example.com")
        )


@pytest.mark.unit
class TestPurge:
    """Expired row purge."""

    @pytest.mark.asyncio
    async def test_purge_removes_only_expired(self, service, repo, clock):
        await service.issue("ada@example.com", TokenPurpose.PASSWORD_RESET)
        kept = await service.issue("ada@example.com", TokenPurpose.EMAIL_VERIFICATION)

        clock.advance(hours=2)

        assert await service.purge_expired() == 1
        assert list(repo.rows) == [kept.token]

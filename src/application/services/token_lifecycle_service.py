"""Token lifecycle: issue, validate and consume single-use tokens.

Email verification and password reset share this service and one token
store. The purpose is encoded in the stored identifier (see TokenPurpose):

    email verification  ->  user@example.com
    password reset      ->  reset_user@example.com

Guarantees:
- Supersession: issuing deletes every earlier token for the identifier, so
  at most one token per identifier is ever valid.
- Single use: consuming deletes the token (and any sibling for the same
  identifier); a second consume fails.
- Uniform failure: every validation or consumption failure is the same
  TokenError ("Invalid or expired token"), whatever the cause.

Architecture:
- Application layer ONLY imports from domain layer (entities, protocols)
- Repository and generator are injected via protocols
- Persistence errors propagate; callers run inside the request transaction,
  so a failed issue leaves no half-created token
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from src.core.clock import Clock, utc_now
from src.core.result import Failure, Result, Success
from src.domain.enums import RESET_IDENTIFIER_PREFIX, TokenPurpose
from src.domain.errors import TokenError
from src.domain.protocols import (
    LoggerProtocol,
    TokenGeneratorProtocol,
    VerificationTokenRepository,
)

DEFAULT_RESET_TTL_SECONDS = 3600
DEFAULT_VERIFICATION_TTL_SECONDS = 86400


@dataclass(frozen=True, slots=True, kw_only=True)
class IssuedToken:
    """Freshly issued token (the only time the raw token is handed out)."""

    token: str
    identifier: str
    expires_at: datetime


@dataclass(frozen=True, slots=True, kw_only=True)
class TokenValidation:
    """A token that is currently valid for its purpose.

    Attributes:
        identifier: Stored identifier (needed to consume the token).
        subject: Email address the token was issued for.
        purpose: What the token proves.
        expires_at: When the token stops being valid.
    """

    identifier: str
    subject: str
    purpose: TokenPurpose
    expires_at: datetime


class TokenLifecycleService:
    """Issues, validates and consumes verification tokens.

    Usage:
        issued = await tokens.issue("ada@example.com", TokenPurpose.PASSWORD_RESET)
        ...
        match await tokens.validate(issued.token, TokenPurpose.PASSWORD_RESET):
            case Success(value=validation):
                await tokens.consume(issued.token, validation.identifier)
            case Failure(error=error):
                ...  # error.message == "Invalid or expired token"
    """

    def __init__(
        self,
        token_repo: VerificationTokenRepository,
        token_generator: TokenGeneratorProtocol,
        *,
        logger: LoggerProtocol,
        reset_ttl_seconds: int = DEFAULT_RESET_TTL_SECONDS,
        verification_ttl_seconds: int = DEFAULT_VERIFICATION_TTL_SECONDS,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            token_repo: Verification token store.
            token_generator: Source of opaque tokens.
            logger: Structured logger (never receives full tokens).
            reset_ttl_seconds: Default lifetime of password reset tokens.
            verification_ttl_seconds: Default lifetime of verification tokens.
            clock: Time source (defaults to current UTC time).
        """
        self._token_repo = token_repo
        self._token_generator = token_generator
        self._logger = logger
        self._default_ttls = {
            TokenPurpose.PASSWORD_RESET: reset_ttl_seconds,
            TokenPurpose.EMAIL_VERIFICATION: verification_ttl_seconds,
        }
        self._clock = clock or utc_now

    async def issue(
        self,
        subject: str,
        purpose: TokenPurpose,
        ttl_seconds: int | None = None,
    ) -> IssuedToken:
        """Issue a new token for subject, superseding any earlier one.

        Args:
            subject: Email address the token is for.
            purpose: Verification or password reset.
            ttl_seconds: Lifetime override (default depends on purpose).

        Returns:
            IssuedToken with the raw token to embed in a link.

        Raises:
            SQLAlchemyError: If the token store fails.
        """
        identifier = purpose.to_identifier(subject)
        ttl = self._default_ttls[purpose] if ttl_seconds is None else ttl_seconds
        expires_at = self._clock() + timedelta(seconds=ttl)
        token = self._token_generator.generate_token()

        superseded = await self._token_repo.delete_by_identifier(identifier)
        await self._token_repo.save(identifier, token, expires_at)

        self._logger.info(
            "Verification token issued",
            purpose=purpose.value,
            identifier=identifier,
            token=token,
            superseded=superseded,
        )
        return IssuedToken(token=token, identifier=identifier, expires_at=expires_at)

    async def validate(
        self, token: str, purpose: TokenPurpose
    ) -> Result[TokenValidation, TokenError]:
        """Check that token is unexpired and belongs to purpose.

        Does not consume the token.
        """
        record = await self._token_repo.find_unexpired(token, self._clock())
        if record is None or not _matches_purpose(record.identifier, purpose):
            return Failure(error=TokenError.invalid_or_expired())

        return Success(
            value=TokenValidation(
                identifier=record.identifier,
                subject=purpose.to_subject(record.identifier),
                purpose=purpose,
                expires_at=record.expires,
            )
        )

    async def consume(self, token: str, identifier: str) -> Result[None, TokenError]:
        """Consume token, then drop every other token for identifier.

        Fails when the token was already consumed, superseded or has expired
        in the meantime.
        """
        deleted = await self._token_repo.delete_unexpired(
            identifier, token, self._clock()
        )
        if deleted == 0:
            self._logger.warning(
                "Token consumption rejected", identifier=identifier, token=token
            )
            return Failure(error=TokenError.invalid_or_expired())

        await self._token_repo.delete_by_identifier(identifier)
        self._logger.info("Verification token consumed", identifier=identifier)
        return Success(value=None)

    async def purge_expired(self) -> int:
        """Delete every expired token. Returns the count removed."""
        return await self._token_repo.delete_expired(self._clock())


def _matches_purpose(identifier: str, purpose: TokenPurpose) -> bool:
    is_reset = identifier.startswith(RESET_IDENTIFIER_PREFIX)
    return is_reset if purpose is TokenPurpose.PASSWORD_RESET else not is_reset

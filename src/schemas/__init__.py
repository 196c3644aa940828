"""Request/response schemas for API endpoints.

All Pydantic models for HTTP request validation and response serialization.
Schemas are kept separate from domain entities (HTTP-layer concerns only).

Usage:
    from src.schemas import UserCreateRequest, PasswordResetCreateRequest
"""

from src.schemas.auth_schemas import (
    # Email verification
    EmailVerificationCreateRequest,
    EmailVerificationCreateResponse,
    # Password reset
    PasswordResetCreateRequest,
    PasswordResetCreateResponse,
    PasswordResetTokenCreateRequest,
    PasswordResetTokenCreateResponse,
    PasswordResetTokenValidationRequest,
    PasswordResetTokenValidationResponse,
    # User (registration)
    UserCreateRequest,
    UserCreateResponse,
    VerificationEmailCreateRequest,
    VerificationEmailCreateResponse,
)
from src.schemas.system_schemas import (
    CacheStatsResponse,
    HealthResponse,
    RateLimitCheckResponse,
)
from src.schemas.webhook_schemas import (
    AuditLogData,
    UserRegisteredData,
    WebhookAcceptedResponse,
    WebhookEvent,
)

__all__ = [
    "AuditLogData",
    "CacheStatsResponse",
    "EmailVerificationCreateRequest",
    "EmailVerificationCreateResponse",
    "HealthResponse",
    "PasswordResetCreateRequest",
    "PasswordResetCreateResponse",
    "PasswordResetTokenCreateRequest",
    "PasswordResetTokenCreateResponse",
    "PasswordResetTokenValidationRequest",
    "PasswordResetTokenValidationResponse",
    "RateLimitCheckResponse",
    "UserCreateRequest",
    "UserCreateResponse",
    "UserRegisteredData",
    "VerificationEmailCreateRequest",
    "VerificationEmailCreateResponse",
    "WebhookAcceptedResponse",
    "WebhookEvent",
]

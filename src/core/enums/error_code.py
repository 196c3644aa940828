"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming and as the last
segment of RFC 7807 problem ``type`` URIs.

Categories:
- Validation errors (INVALID_*, *_TOO_WEAK)
- Resource errors (*_NOT_FOUND)
- Conflict errors (*_ALREADY_*)
- Token errors (TOKEN_*)
- Rate limit errors (RATE_LIMIT_*)
- Delivery errors (EMAIL_*, WEBHOOK_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable)."""

    # Validation errors
    INVALID_EMAIL = "invalid_email"
    INVALID_USERNAME = "invalid_username"
    PASSWORD_TOO_WEAK = "password_too_weak"
    VALIDATION_FAILED = "validation_failed"

    # Resource errors
    USER_NOT_FOUND = "user_not_found"

    # Conflict errors
    EMAIL_ALREADY_EXISTS = "email_already_exists"
    USERNAME_ALREADY_EXISTS = "username_already_exists"
    EMAIL_ALREADY_VERIFIED = "email_already_verified"

    # Token errors
    TOKEN_INVALID = "token_invalid"

    # Webhook errors
    WEBHOOK_SIGNATURE_INVALID = "webhook_signature_invalid"
    WEBHOOK_NOT_CONFIGURED = "webhook_not_configured"

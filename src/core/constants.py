"""Centralized constants for internal implementation details.

These are NOT environment-specific configuration. For environment-specific
settings, use `src/core/config.py` instead.

Example:
    >>> from src.core.constants import TOKEN_BYTES
    >>> token = secrets.token_hex(TOKEN_BYTES)
"""

# =============================================================================
# Token and Key Lengths
# =============================================================================

TOKEN_BYTES: int = 32
"""Number of bytes for secure token generation (32 bytes = 256 bits)."""

TOKEN_HEX_LENGTH: int = 64
"""Length of hex-encoded token string (TOKEN_BYTES * 2)."""

TOKEN_LOG_PREFIX_LENGTH: int = 8
"""Characters of a token that may appear in logs."""

BCRYPT_MAX_PASSWORD_BYTES: int = 72
"""bcrypt only reads the first 72 bytes of a password."""


# =============================================================================
# Signatures
# =============================================================================

WEBHOOK_SIGNATURE_HEADER: str = "X-Webhook-Signature"
"""Header carrying the HMAC signature of inbound webhook bodies."""

WEBHOOK_SIGNATURE_PREFIX: str = "sha256="
"""Scheme prefix of the webhook signature value."""


# =============================================================================
# Response Limits
# =============================================================================

RESPONSE_BODY_MAX_LENGTH: int = 500
"""Maximum length for response body in error messages (truncation limit)."""
